"""Full argparse tree with subparsers, dispatcher, and main() entry point."""

from __future__ import annotations

import argparse
import sys

from clonekit import __version__
from clonekit.errors import ClonekitError, UserCancelled


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clonekit",
        description="Create and manage linked clones of a large editor project.",
        epilog=(
            "common switches:\n"
            "  -p, --project DIR   use DIR as the managed project (default: cwd)\n"
            "  -v, --verbose       show debug output\n"
            "\n"
            "run 'clonekit COMMAND --help' for subcommand-specific options"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # Import and register all subcommand parsers.
    from clonekit.commands.arg_cmd import add_parser as add_arg_parser
    from clonekit.commands.config_cmd import add_parser as add_config_parser
    from clonekit.commands.create import add_parser as add_create_parser
    from clonekit.commands.delete import add_parser as add_delete_parser
    from clonekit.commands.list_cmd import add_parser as add_list_parser
    from clonekit.commands.open_cmd import add_parser as add_open_parser
    from clonekit.commands.persist import add_parser as add_persist_parser
    from clonekit.commands.status import add_parser as add_status_parser

    add_create_parser(subparsers)
    add_list_parser(subparsers)
    add_open_parser(subparsers)
    add_delete_parser(subparsers)
    add_arg_parser(subparsers)
    add_status_parser(subparsers)
    add_persist_parser(subparsers)
    add_config_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()

    import argcomplete
    argcomplete.autocomplete(parser)

    effective = list(argv if argv is not None else sys.argv[1:])

    # Extract -v/--verbose before subcommand dispatch.
    verbose = "-v" in effective or "--verbose" in effective
    effective = [a for a in effective if a not in ("-v", "--verbose")]

    from clonekit.log import setup_logging
    setup_logging(verbose=verbose)

    # Handle top-level --help and --version before argparse dispatch
    # (kept off the parser so they don't appear in tab-completion).
    if not effective or effective[0] in ("-h", "--help"):
        parser.print_help()
        sys.exit(0)
    if effective[0] == "--version":
        print(f"clonekit {__version__}")
        sys.exit(0)

    args = parser.parse_args(effective)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        sys.exit(0)

    try:
        rc = func(args)
    except UserCancelled as e:
        print(str(e) or "Aborted.")
        rc = 2
    except ClonekitError as e:
        print(f"Error: {e}", file=sys.stderr)
        rc = 1
    except KeyboardInterrupt:
        print()
        rc = 130

    sys.exit(rc)
