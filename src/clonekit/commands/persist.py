"""clonekit persist: show or change a clone's persistent data path."""

from __future__ import annotations

import argparse
import sys

from clonekit.commands import add_project_option, manager_for
from clonekit.registry import read_identity


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "persist",
        help="Show or change the persistent data path of a clone",
        description=(
            "Show the persistent data path of a clone, or change it with\n"
            "--set COMPANY/PRODUCT (only for clones with copied ProjectSettings)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("path", help="Path to the clone")
    p.add_argument("--set", dest="names", metavar="COMPANY/PRODUCT", default=None)
    add_project_option(p)
    p.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    manager = manager_for(args.project)

    if args.names is None:
        identity = read_identity(args.path).refreshed()
        print(manager.persistent_data_path(identity))
        return 0

    parts = args.names.split("/")
    if len(parts) != 2 or not all(parts):
        print("Error: expected COMPANY/PRODUCT", file=sys.stderr)
        return 1
    identity = manager.set_company_product(args.path, parts[0], parts[1])
    print(f"Persistent path: {manager.persistent_data_path(identity)}")
    return 0
