"""clonekit open: launch an editor on a clone."""

from __future__ import annotations

import argparse
import sys

from clonekit.commands import add_project_option, manager_for


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "open",
        help="Open a clone in a new editor",
        description=(
            "Open a clone in a new editor process. The clone's Packages folder "
            "is refreshed first if it differs from the original's."
        ),
    )
    p.add_argument("path", help="Path to the clone")
    add_project_option(p)
    p.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    manager = manager_for(args.project)
    if manager.is_running(args.path):
        print(f"Error: {args.path} is already open in another editor.", file=sys.stderr)
        return 1
    manager.open(args.path)
    print(f"Opening {args.path}")
    return 0
