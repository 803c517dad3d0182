"""clonekit config: get/set preferences."""

from __future__ import annotations

import argparse
import sys
from dataclasses import fields

from clonekit.commands import load_preferences, preferences_file
from clonekit.config import config_keys, write_config_key


# Friendly aliases: short name -> flat config key.
_KEY_ALIASES = {
    "clones_root": "clones_root_path",
    "editor": "editor_path",
    "check_lock_file": "editor_check_lock_file",
    "show_origin_info": "display_show_origin_info",
}


def _resolve_key(raw: str) -> str | None:
    """Map a user-supplied key name to the canonical flat config key."""
    if raw in _KEY_ALIASES:
        return _KEY_ALIASES[raw]
    if raw in config_keys():
        return raw
    return None


def add_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "config",
        help="Get or set preferences",
        description=(
            "Get or set clonekit preferences.\n\n"
            "With no arguments, list all current values.\n"
            "With KEY, show the value for that key.\n"
            "With KEY VALUE, store a new value.\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("key", nargs="?", default=None, help="Preference key to read or write")
    p.add_argument("value", nargs="?", default=None, help="New value to set (omit to read)")
    p.set_defaults(func=run)


def run(args: argparse.Namespace) -> int:
    path = preferences_file()
    config = load_preferences()

    if args.key is None:
        print(f"Preferences: {path}")
        print()
        for fld in fields(config):
            print(f"  {fld.name} = {getattr(config, fld.name)}")
        return 0

    flat_key = _resolve_key(args.key)
    if flat_key is None:
        aliases = ", ".join(f"{a} ({v})" for a, v in _KEY_ALIASES.items())
        print(f"Error: Unknown config key: {args.key}", file=sys.stderr)
        print(f"Valid keys: {', '.join(config_keys())}", file=sys.stderr)
        print(f"Aliases: {aliases}", file=sys.stderr)
        return 1

    if args.value is None:
        print(getattr(config, flat_key))
    else:
        write_config_key(path, flat_key, args.value)
        print(f"Set {flat_key} = {args.value}")
    return 0
