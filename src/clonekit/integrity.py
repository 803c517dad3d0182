"""Keep a clone's copied package cache consistent with the original's."""

from __future__ import annotations

import hashlib
import os
import shutil
from pathlib import Path

from clonekit.log import get_logger
from clonekit.mirror import copy_tree

logger = get_logger("integrity")

_CHUNK = 1024 * 1024


def folder_digest(path: str | os.PathLike) -> str:
    """SHA-256 over the sorted relative paths and contents of files under *path*."""
    root = Path(path)
    digest = hashlib.sha256()
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            full = Path(dirpath) / filename
            rel = full.relative_to(root).as_posix()
            digest.update(rel.encode())
            digest.update(b"\0")
            try:
                with open(full, "rb") as f:
                    while chunk := f.read(_CHUNK):
                        digest.update(chunk)
            except OSError:
                # Unreadable files still contribute their name.
                logger.debug("Could not read %s for digest", full)
            digest.update(b"\0")
    return digest.hexdigest()


def validate_folder(
    clone_path: str | os.PathLike,
    original_path: str | os.PathLike,
    folder: str,
) -> bool:
    """Replace ``clone/folder`` with a fresh copy if it differs from the original's.

    Linked folders share storage with the original and are left alone.
    Returns True if the clone's copy was refreshed.
    """
    source = Path(original_path) / folder
    target = Path(clone_path) / folder
    if not source.is_dir():
        logger.debug("Nothing to validate, %s does not exist", source)
        return False
    if os.path.islink(target) or os.path.isjunction(target):
        return False
    if target.is_dir() and folder_digest(source) == folder_digest(target):
        return False

    logger.warning("%s of %s differs from the original; refreshing it", folder, clone_path)
    if target.is_dir():
        shutil.rmtree(target)
    copy_tree(source, target)
    return True
