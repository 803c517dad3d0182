"""Platform base class: directory links, editor liveness, and editor launch."""

from __future__ import annotations

import os
import subprocess
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

from clonekit.log import get_logger

logger = get_logger("platforms")

# Editor-owned lock artifact, relative to a project root.
LOCK_FILE_PARTS = ("Temp", "UnityLockfile")


class LinkResult(Enum):
    """Outcome of ``Platform.link``."""

    created = "created"
    target_exists = "target_exists"
    source_missing = "source_missing"


def lock_file_path(project_path: str | os.PathLike) -> Path:
    return Path(project_path).joinpath(*LOCK_FILE_PARTS)


class Platform(ABC):
    """Operating-system specific operations used by the clone lifecycle.

    One subclass per supported OS; ``select_platform()`` picks the right one
    once at process start.  Everything platform-independent lives here.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier (e.g. 'linux')."""
        ...

    def link(self, source: str | os.PathLike, destination: str | os.PathLike) -> LinkResult:
        """Make *destination* a directory link to *source*.

        Does nothing (and logs a warning) if *destination* already exists or
        *source* is missing.  Raises ``LinkError`` if the OS refuses.
        """
        if os.path.lexists(destination):
            logger.warning("Skipping link, destination already exists: %s", destination)
            return LinkResult.target_exists
        if not os.path.isdir(source):
            logger.warning("Skipping link, source does not exist: %s", source)
            return LinkResult.source_missing
        logger.debug("Linking %s -> %s", destination, source)
        self._create_link(os.fspath(source), os.fspath(destination))
        return LinkResult.created

    @abstractmethod
    def _create_link(self, source: str, destination: str) -> None:
        ...

    def is_link(self, path: str | os.PathLike) -> bool:
        """True if *path* is a link node rather than a real directory."""
        return os.path.islink(path)

    def unlink(self, path: str | os.PathLike) -> None:
        """Remove the link node at *path*, leaving its target untouched."""
        os.unlink(path)

    def is_running(self, project_path: str | os.PathLike, *, check_lock_file: bool = True) -> bool:
        """Best-effort check whether an editor has *project_path* open."""
        return lock_file_path(project_path).is_file()

    def editor_binary(self, app_path: str | os.PathLike) -> Path:
        """Executable to launch for the configured editor path."""
        return Path(app_path)

    def open_project(self, editor_path: str | os.PathLike, project_path: str | os.PathLike) -> None:
        """Launch a detached editor process pointed at *project_path*."""
        cmd = [os.fspath(self.editor_binary(editor_path)), "-projectPath", os.fspath(project_path)]
        logger.debug("Opening project: %s", " ".join(cmd))
        subprocess.Popen(cmd, **self._popen_kwargs())

    def _popen_kwargs(self) -> dict:
        return {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.DEVNULL,
        }

    @abstractmethod
    def persistent_data_root(self) -> Path:
        """Base directory under which the editor keeps per-product data."""
        ...
