"""Recursive directory copy with byte-level progress and cooperative cancellation."""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from clonekit.errors import NotFoundError, SelfCopyError
from clonekit.log import get_logger
from clonekit.paths import same_path

logger = get_logger("mirror")

# Called after every file with (source file, fraction done).  A truthy
# return value cancels the copy.
ProgressCallback = Callable[[Path, float], "bool | None"]


@dataclass
class CopyResult:
    """Outcome of a ``copy_tree`` run."""

    total_bytes: int = 0
    copied_bytes: int = 0
    files_copied: int = 0
    skipped: list[Path] = field(default_factory=list)
    cancelled: bool = False

    @property
    def fraction(self) -> float:
        if self.total_bytes <= 0:
            return 1.0
        return min(1.0, self.copied_bytes / self.total_bytes)


def _entries(directory: Path) -> tuple[list[os.DirEntry], list[os.DirEntry]]:
    """Split *directory* into (files, subdirectories), each sorted by name.

    Symlinks count as files so they are recreated rather than followed.
    """
    files: list[os.DirEntry] = []
    dirs: list[os.DirEntry] = []
    with os.scandir(directory) as it:
        for entry in it:
            if entry.is_dir(follow_symlinks=False):
                dirs.append(entry)
            else:
                files.append(entry)
    files.sort(key=lambda e: e.name)
    dirs.sort(key=lambda e: e.name)
    return files, dirs


def _entry_size(entry: os.DirEntry) -> int:
    try:
        if entry.is_symlink():
            return 0
        return entry.stat(follow_symlinks=False).st_size
    except OSError:
        return 0


def directory_size(path: str | os.PathLike) -> int:
    """Total size in bytes of every regular file under *path*.

    Directories that cannot be listed count as empty.
    """
    total = 0
    try:
        files, dirs = _entries(Path(path))
    except OSError as e:
        logger.debug("Could not list %s: %s", path, e)
        return 0
    for entry in files:
        total += _entry_size(entry)
    for entry in dirs:
        total += directory_size(entry.path)
    return total


def _copy_entry(entry: os.DirEntry, target: Path) -> None:
    if entry.is_symlink():
        if os.path.lexists(target):
            os.unlink(target)
        os.symlink(os.readlink(entry.path), target)
    else:
        shutil.copyfile(entry.path, target)
        shutil.copymode(entry.path, target)


def copy_tree(
    source: str | os.PathLike,
    destination: str | os.PathLike,
    on_progress: ProgressCallback | None = None,
) -> CopyResult:
    """Copy *source* into *destination*, overwriting existing files.

    Files that cannot be read or written (typically held open by a running
    editor) are skipped and listed in ``CopyResult.skipped``; their size still
    counts towards progress.  A directory that cannot be listed or created is
    skipped the same way, with everything below it.  When *on_progress*
    returns a truthy value the copy stops at once and the partial result is
    returned.

    Raises ``SelfCopyError`` if *source* and *destination* are the same
    directory, ``NotFoundError`` if *source* is not a directory.
    """
    source = Path(source)
    destination = Path(destination)
    if same_path(source, destination, ignore_case=True):
        raise SelfCopyError(f"Cannot copy directory into itself: {source}")
    if not source.is_dir():
        raise NotFoundError(f"Source directory does not exist: {source}")

    result = CopyResult(total_bytes=directory_size(source))
    logger.debug("Copying %s -> %s (%d bytes)", source, destination, result.total_bytes)
    _copy_recursive(source, destination, result, on_progress)
    if result.skipped:
        logger.warning(
            "Skipped %d item(s) while copying %s; they may be in use",
            len(result.skipped), source,
        )
    return result


def _copy_recursive(
    source: Path,
    destination: Path,
    result: CopyResult,
    on_progress: ProgressCallback | None,
) -> bool:
    """Copy one directory level; returns False once cancelled."""
    try:
        destination.mkdir(parents=True, exist_ok=True)
        files, dirs = _entries(source)
    except OSError as e:
        logger.debug("Could not copy directory %s: %s", source, e)
        result.skipped.append(source)
        return True

    for entry in files:
        try:
            _copy_entry(entry, destination / entry.name)
            result.files_copied += 1
        except OSError as e:
            logger.debug("Could not copy %s: %s", entry.path, e)
            result.skipped.append(Path(entry.path))
        result.copied_bytes += _entry_size(entry)

        if on_progress is not None and on_progress(Path(entry.path), result.fraction):
            logger.debug("Copy of %s cancelled", source)
            result.cancelled = True
            return False

    for entry in dirs:
        if not _copy_recursive(Path(entry.path), destination / entry.name, result, on_progress):
            return False
    return True
