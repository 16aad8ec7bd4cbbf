"""Platform enumeration and host detection.

``Platform`` names both the target a release archive is built for and the
host the packager runs on. Host detection is cached.
"""

from __future__ import annotations

import sys as _sys
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "detect_platform",
    "is_windows",
]


class Platform(Enum):
    """Operating system platform."""

    WINDOWS = auto()
    MACOS = auto()
    LINUX = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_unix(self) -> bool:
        """Unix hosts carry POSIX mode bits and symbolic links natively."""
        return self in (Platform.LINUX, Platform.MACOS)


@lru_cache(maxsize=1)
def detect_platform() -> Platform | None:
    """Detect the host operating system (cached).

    Returns None for hosts we do not recognise.
    """
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return None


def is_windows() -> bool:
    return detect_platform() == Platform.WINDOWS
