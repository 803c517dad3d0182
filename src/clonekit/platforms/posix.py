"""Linux and macOS platforms: symbolic links and existence-based liveness."""

from __future__ import annotations

import os
from pathlib import Path

from clonekit.errors import LinkError
from clonekit.paths import xdg
from clonekit.platforms.base import Platform


class LinuxPlatform(Platform):
    """Linux: directory symlinks, lock artifact presence means running."""

    @property
    def name(self) -> str:
        return "linux"

    def _create_link(self, source: str, destination: str) -> None:
        try:
            os.symlink(source, destination, target_is_directory=True)
        except OSError as e:
            raise LinkError(f"Cannot link {destination} -> {source}: {e}") from e

    def _popen_kwargs(self) -> dict:
        kwargs = super()._popen_kwargs()
        # Detach so the editor outlives this process.
        kwargs["start_new_session"] = True
        return kwargs

    def persistent_data_root(self) -> Path:
        return xdg("XDG_CONFIG_HOME", ".config") / "unity3d"


class MacPlatform(LinuxPlatform):
    """macOS: same link semantics as Linux, editor shipped as an app bundle."""

    @property
    def name(self) -> str:
        return "macos"

    def editor_binary(self, app_path: str | os.PathLike) -> Path:
        path = Path(app_path)
        if path.suffix == ".app":
            return path / "Contents" / "MacOS" / path.stem
        return path

    def persistent_data_root(self) -> Path:
        return Path.home() / "Library" / "Application Support"
