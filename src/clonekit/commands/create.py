"""clonekit create: make a new linked clone of the current project."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from clonekit.commands import add_project_option, manager_for
from clonekit.paths import MAX_CLONES


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "create",
        help="Create a new clone of the project",
        description=(
            "Create a new clone. Library and Packages are copied, AutoBuild and\n"
            "LocalPackages are linked. Assets and ProjectSettings are linked\n"
            "unless --copy-assets / --copy-settings is given.\n\n"
            "Linked folders are shared with the original: edits in any clone\n"
            "are seen by every other editor using them."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "path", nargs="?", default=None,
        help="Clone directory (default: next free slot under the clones root)",
    )
    p.add_argument(
        "--copy-assets", action="store_true",
        help="Copy Assets instead of linking (allows changing assets in the clone)",
    )
    p.add_argument(
        "--copy-settings", action="store_true",
        help="Copy ProjectSettings instead of linking (allows a distinct persistent path)",
    )
    add_project_option(p)
    p.set_defaults(func=run)


class _ProgressPrinter:
    """Render copy progress as a single updating line on stderr."""

    def __init__(self) -> None:
        self._label: str | None = None

    def __call__(self, label: str, path: Path, fraction: float) -> bool:
        if label != self._label:
            if self._label is not None:
                print(file=sys.stderr)
            self._label = label
        print(f"\r  Copying {label}: {fraction * 100:6.2f}%", end="", file=sys.stderr, flush=True)
        return False

    def finish(self) -> None:
        if self._label is not None:
            print(file=sys.stderr)
            self._label = None


def run(args: argparse.Namespace) -> int:
    manager = manager_for(args.project)

    dest = args.path or manager.next_clone_path()
    if dest is None:
        print(f"Error: all {MAX_CLONES} clone slots are in use.", file=sys.stderr)
        return 1

    printer = _ProgressPrinter()
    try:
        identity = manager.create(
            dest,
            link_assets=not args.copy_assets,
            link_settings=not args.copy_settings,
            progress=printer,
        )
    except KeyboardInterrupt:
        printer.finish()
        print(
            f"Copy interrupted. Remove the partial clone with: clonekit delete {dest}",
            file=sys.stderr,
        )
        return 130
    finally:
        printer.finish()

    print(f"Created clone: {identity.project_path}")
    print(f"  Assets: {'linked' if identity.is_link_asset_folder else 'copied'}")
    print(f"  ProjectSettings: {'linked' if identity.is_link_project_settings_folder else 'copied'}")
    return 0
