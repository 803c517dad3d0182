"""clonekit list: show the clones of the current project."""

from __future__ import annotations

import argparse

from clonekit.commands import add_project_option, manager_for
from clonekit.paths import MAX_CLONES
from clonekit.registry import get_argument


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "list",
        help="List clones of the project",
        description="List clones of the project with their running state and argument.",
    )
    add_project_option(p)
    p.set_defaults(func=run)


def _print_paths(manager, identity, indent: str = "  ") -> None:
    print(f"{indent}Project path:    {identity.project_path}")
    print(f"{indent}Persistent path: {manager.persistent_data_path(identity)}")


def run(args: argparse.Namespace) -> int:
    manager = manager_for(args.project)

    if manager.is_clone:
        print("This project is a clone; run 'clonekit status' for details.")
        return 0

    if manager.config.display_show_origin_info:
        print("Origin")
        _print_paths(manager, manager.current_identity())
        print()

    clones = manager.clones()
    if not clones:
        print("No project clones found. Create one with 'clonekit create'.")
        return 0

    for i, identity in enumerate(clones):
        running = " (running)" if manager.is_running(identity.project_path) else ""
        print(f"Clone {i}{running}")
        _print_paths(manager, identity)
        assets = "linked" if identity.is_link_asset_folder else "copied"
        settings = "linked" if identity.is_link_project_settings_folder else "copied"
        print(f"  Assets: {assets}, ProjectSettings: {settings}")
        print(f"  Argument: {get_argument(identity.project_path)!r}")
    print()
    print(f"{len(clones)} of {MAX_CLONES} clone slots in use.")
    return 0
