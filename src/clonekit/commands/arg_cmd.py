"""clonekit arg: read or set a clone's argument."""

from __future__ import annotations

import argparse
import os

from clonekit.registry import get_argument, set_argument


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "arg",
        help="Show or set the argument of a clone",
        description=(
            "Show or set the free-form argument stored with a clone.\n\n"
            "Code running inside the clone reads it to tell clones apart,\n"
            "e.g. to start one editor as server and another as client."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("path", nargs="?", default=None, help="Path to the clone (default: cwd)")
    p.add_argument("value", nargs="?", default=None, help="New argument (omit to read)")
    p.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    path = args.path or os.getcwd()
    if args.value is None:
        print(get_argument(path))
        return 0
    set_argument(path, args.value)
    print(f"Set argument for {path}")
    return 0
