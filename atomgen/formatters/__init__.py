"""Output formatters."""
from .atom import AtomFormatter
from .console import ReportFormatter

__all__ = ["AtomFormatter", "ReportFormatter"]
