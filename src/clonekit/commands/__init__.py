"""Subcommands and the helpers they share."""

from __future__ import annotations

import os
from pathlib import Path

from clonekit.config import ClonekitConfig, config_file_path, load_config
from clonekit.lifecycle import CloneManager
from clonekit.paths import xdg


def preferences_file() -> Path:
    """Location of clonekit.toml."""
    return config_file_path(xdg("XDG_CONFIG_HOME", ".config"))


def load_preferences() -> ClonekitConfig:
    return load_config(preferences_file())


def manager_for(project_dir: str | None) -> CloneManager:
    """CloneManager for *project_dir* (default: cwd) with the user's preferences."""
    return CloneManager(project_dir or os.getcwd(), config=load_preferences())


def add_project_option(p) -> None:
    p.add_argument(
        "-p", "--project", default=None,
        help="Managed project directory (default: cwd)",
    )
