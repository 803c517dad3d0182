"""clonekit delete: remove a clone."""

from __future__ import annotations

import argparse
import sys

from clonekit.commands import add_project_option, manager_for
from clonekit.utils import confirm_prompt


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "delete",
        help="Delete a clone",
        description=(
            "Delete a clone directory. Linked folders are unlinked first, so the "
            "original project's files are never touched."
        ),
    )
    p.add_argument("path", help="Path to the clone")
    p.add_argument("--force", action="store_true", help="Skip confirmation prompt")
    add_project_option(p)
    p.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    manager = manager_for(args.project)

    if manager.is_running(args.path):
        print(f"Error: {args.path} is open in an editor; close it first.", file=sys.stderr)
        return 1

    if not args.force:
        print(f"Clone: {args.path}")
        confirm_prompt("Delete this clone? Type 'yes' to confirm: ")

    print("Deleting clone... ", end="", flush=True)
    if manager.delete(args.path):
        print("done.")
    else:
        print("nothing to delete.")
    return 0
