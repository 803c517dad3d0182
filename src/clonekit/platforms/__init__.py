"""Platform selection."""

from __future__ import annotations

import sys

from clonekit.errors import PlatformUnsupportedError
from clonekit.platforms.base import LinkResult, Platform, lock_file_path
from clonekit.platforms.posix import LinuxPlatform, MacPlatform
from clonekit.platforms.windows import WindowsPlatform

__all__ = [
    "LinkResult", "LinuxPlatform", "MacPlatform", "Platform", "WindowsPlatform",
    "lock_file_path", "select_platform",
]

_PLATFORMS: dict[str, type[Platform]] = {
    "linux": LinuxPlatform,
    "darwin": MacPlatform,
    "win32": WindowsPlatform,
}


def select_platform(platform_id: str | None = None) -> Platform:
    """Instantiate the platform for *platform_id* (default: ``sys.platform``).

    Raises ``PlatformUnsupportedError`` for an unrecognised OS.
    """
    key = platform_id or sys.platform
    for prefix, cls in _PLATFORMS.items():
        if key.startswith(prefix):
            return cls()
    raise PlatformUnsupportedError(f"Unsupported platform: {key}")
