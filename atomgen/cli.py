"""CLI entry point for atomgen."""
import argparse
import logging
import sys

from atomgen import __version__
from atomgen.formatters import AtomFormatter, ReportFormatter
from atomgen.models import CommonAttributes
from atomgen.verify import VerificationReport, verify_feed


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="atomgen",
        description="Build, verify and write Atom 1.0 feeds from a YAML/JSON definition",
    )
    parser.add_argument("definition", nargs="?", default=None, metavar="DEFINITION",
                        help="Feed definition file (.yaml, .yml or .json)")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-o", "--output", type=str, default=None,
                        help="Write the feed to this file instead of stdout")
    parser.add_argument("--strict", action="store_true",
                        help="Exit with status 1 and write nothing if verification finds problems")
    parser.add_argument("--no-verify", action="store_true", dest="no_verify",
                        help="Skip verification")
    parser.add_argument("--lang", type=str, default=None,
                        help="xml:lang for the feed when the definition does not set one")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status messages on stderr")
    parser.add_argument("--no-config", action="store_true",
                        help="Ignore config files (~/.atomgen.yaml, ./atomgen.yaml)")
    parser.add_argument("--init-config", action="store_true", dest="init_config",
                        help="Write a starter ~/.atomgen.yaml and exit")

    args = parser.parse_args(argv)

    # Apply config file defaults (CLI args always win)
    if not args.no_config:
        from atomgen.config import apply_config_defaults
        args = apply_config_defaults(parser, args)

    if args.init_config:
        from atomgen.config import generate_starter_config
        path = generate_starter_config()
        print(f"📝 Wrote starter config to {path}")
        return

    if not args.definition:
        parser.error("the following arguments are required: DEFINITION")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    from atomgen.definition import load_feed
    try:
        feed = load_feed(args.definition)
    except Exception as e:
        print(f"Error loading definition: {e}", file=sys.stderr)
        sys.exit(1)

    if args.lang:
        if feed.attrs is None:
            feed.attrs = CommonAttributes()
        if not feed.attrs.lang:
            feed.attrs.lang = args.lang

    report = VerificationReport() if args.no_verify else verify_feed(feed)
    if not report.ok and not args.quiet:
        print(ReportFormatter().format(report, title=feed.id or args.definition), file=sys.stderr)
    if args.strict and not report.ok:
        print(f"❌ {len(report)} problem(s) found, feed not written", file=sys.stderr)
        sys.exit(1)

    output = AtomFormatter().format(feed)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        if not args.quiet:
            print(f"✅ Wrote {len(feed.entries)} entries to {args.output}", file=sys.stderr)
    else:
        print(output)


if __name__ == "__main__":
    main()
