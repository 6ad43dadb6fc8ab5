"""Rich console rendering of a verification report."""
import io

from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from atomgen.verify import VerificationReport


class ReportFormatter:
    def format(self, report: VerificationReport, title: str = "feed") -> str:
        console = Console(record=True, width=120, file=io.StringIO())
        if report.ok:
            console.print(Panel(f"[bold green]✅ {escape(title)}[/] — no problems found", expand=False))
            return console.export_text()

        console.print(Panel(f"[bold red]❌ {escape(title)}[/] — {len(report)} problem(s)", expand=False))
        table = Table(show_header=True, header_style="bold")
        table.add_column("Path", style="cyan", no_wrap=True)
        table.add_column("Kind", style="magenta")
        table.add_column("Problem")
        for problem in report:
            table.add_row(Text(problem.path), problem.kind.value, Text(problem.message))
        console.print(table)
        return console.export_text()
