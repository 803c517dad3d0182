"""clonekit status: describe the current project."""

from __future__ import annotations

import argparse

from clonekit.commands import add_project_option, manager_for
from clonekit.registry import get_argument


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "status",
        help="Show whether the project is an original or a clone",
        description="Show whether the project is an original or a clone, and its layout.",
    )
    add_project_option(p)
    p.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    manager = manager_for(args.project)
    identity = manager.current_identity()
    layout = identity.layout

    print(f"Project: {layout.project_path}")
    if not manager.is_clone:
        print("Role: original")
        print(f"Clones: {len(manager.clones())}")
    else:
        original = manager.original_project_path()
        print("Role: clone")
        print(f"Original: {original or '(not found)'}")
        if identity.is_link_asset_folder:
            print("Assets: linked. Changing assets is NOT allowed!")
        else:
            print("Assets: copied. Changing assets is allowed.")
        if identity.is_link_project_settings_folder:
            print("ProjectSettings: linked. Changing the persistent path is NOT allowed!")
        else:
            print("ProjectSettings: copied. Changing the persistent path is allowed.")
        print(f"Argument: {get_argument(layout.project_path)!r}")
    print(f"Company: {layout.company_name}")
    print(f"Product: {layout.product_name}")
    print(f"Persistent path: {manager.persistent_data_path(identity)}")
    return 0
