"""Release platforms: CLI names, identifiers and archive suffixes.

Adding a platform means adding it to these tables (and registering a bundling
strategy); nothing else in the pipeline branches on the platform.
"""

from __future__ import annotations

from relpack.core.result import Err, Ok, Result
from relpack.platform.detection import Platform
from relpack.release.errors import UnknownPlatform

__all__ = [
    "Platform",
    "archive_suffix",
    "parse_platform",
    "platform_id",
    "supported_platforms",
]

_BY_NAME: dict[str, Platform] = {
    "windows": Platform.WINDOWS,
    "macos": Platform.MACOS,
    "linux": Platform.LINUX,
}

_PLATFORM_IDS: dict[Platform, str] = {
    Platform.WINDOWS: "windows-x64",
    Platform.MACOS: "macos-universal",
    Platform.LINUX: "linux-x64",
}

# Platforms without an entry here cannot be released yet.
_ARCHIVE_SUFFIXES: dict[Platform, str] = {
    Platform.WINDOWS: "win64",
    Platform.MACOS: "macos",
}


def supported_platforms() -> tuple[Platform, ...]:
    """Platforms that have an archive suffix."""
    return tuple(_ARCHIVE_SUFFIXES)


def parse_platform(name: str) -> Result[Platform, UnknownPlatform]:
    """Parse a CLI/config platform name (``macos``) or id (``macos-universal``)."""
    platform = _BY_NAME.get(name)
    if platform is None:
        platform = next((p for p, pid in _PLATFORM_IDS.items() if pid == name), None)
    if platform is None:
        return Err(UnknownPlatform(name, known=tuple(sorted(_BY_NAME))))
    return Ok(platform)


def platform_id(platform: Platform) -> str:
    return _PLATFORM_IDS.get(platform, str(platform))


def archive_suffix(platform: Platform) -> Result[str, UnknownPlatform]:
    suffix = _ARCHIVE_SUFFIXES.get(platform)
    if suffix is None:
        return Err(
            UnknownPlatform(
                str(platform),
                known=tuple(str(p) for p in _ARCHIVE_SUFFIXES),
                platform=platform,
                hint="no archive suffix is registered for this platform",
            )
        )
    return Ok(suffix)
