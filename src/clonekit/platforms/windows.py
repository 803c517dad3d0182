"""Windows platform: directory junctions and lock-aware liveness."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from clonekit.errors import LinkError
from clonekit.platforms.base import Platform, lock_file_path


def _is_file_locked(path: Path) -> bool:
    """True if *path* cannot be opened, i.e. another process holds it."""
    try:
        with open(path, "r+b"):
            pass
    except OSError:
        return True
    return False


class WindowsPlatform(Platform):
    """Windows: ``mklink /J`` junctions; a crashed editor may leave its lock file behind."""

    @property
    def name(self) -> str:
        return "windows"

    def _create_link(self, source: str, destination: str) -> None:
        cmd = ["cmd.exe", "/c", "mklink", "/J", destination, source]
        result = subprocess.run(cmd, capture_output=True, text=True)
        if result.returncode != 0:
            raise LinkError(
                f"Cannot create junction {destination} -> {source}: "
                f"{result.stderr.strip() or result.stdout.strip()}"
            )

    def is_link(self, path: str | os.PathLike) -> bool:
        return os.path.islink(path) or os.path.isjunction(path)

    def unlink(self, path: str | os.PathLike) -> None:
        # Junctions and directory symlinks are removed like empty directories.
        os.rmdir(path)

    def is_running(self, project_path: str | os.PathLike, *, check_lock_file: bool = True) -> bool:
        lock_file = lock_file_path(project_path)
        if not lock_file.is_file():
            return False
        if check_lock_file:
            return _is_file_locked(lock_file)
        return True

    def _popen_kwargs(self) -> dict:
        kwargs = super()._popen_kwargs()
        kwargs["creationflags"] = (
            getattr(subprocess, "DETACHED_PROCESS", 0)
            | getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", 0)
        )
        return kwargs

    def persistent_data_root(self) -> Path:
        profile = os.environ.get("USERPROFILE", "")
        home = Path(profile) if profile else Path.home()
        return home / "AppData" / "LocalLow"
