"""Per-platform bundling strategies.

Windows plugins ship as a single ``.vst3`` file (a renamed DLL), so a plain
deflated zip is enough. macOS plugins ship as a ``.vst3`` directory bundle
whose inner binary must stay executable and whose symbolic links must stay
links; that strategy writes every member with its Unix mode.

Both strategies write into a temp file that is renamed over the destination
only once the archive is complete.
"""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Protocol
from zipfile import ZIP_DEFLATED, LargeZipFile, ZipFile

from relpack.core.result import Err, Ok, Result
from relpack.platform.detection import Platform
from relpack.platform.files import atomic_output
from relpack.release.archive import add_tree
from relpack.release.errors import (
    ArchiveWriteError,
    BundleSourceMissing,
    ReleaseError,
    UnknownPlatform,
)
from relpack.release.model import ArchiveArtifact
from relpack.release.semver import Version

__all__ = [
    "BundleStrategy",
    "MacosBundler",
    "WindowsBundler",
    "bundle",
    "get_strategy",
]


class BundleStrategy(Protocol):
    def check_source(self, source: Path) -> str | None:
        """Return why ``source`` is unusable for this platform, or None."""
        ...

    def write(self, source: Path, archive: Path) -> None:
        """Write ``source`` into a new zip at ``archive``. May raise OSError."""
        ...


class WindowsBundler:
    """One file at the archive root, ordinary compression."""

    def check_source(self, source: Path) -> str | None:
        if not source.is_file():
            return "is not a file (expected a single .vst3 binary)"
        return None

    def write(self, source: Path, archive: Path) -> None:
        # Build tools sometimes leave mtime=0 on outputs; see archive._date_time.
        with ZipFile(archive, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
            zf.write(source, arcname=source.name)


class MacosBundler:
    """Whole bundle directory, symbolic links and mode bits preserved."""

    def check_source(self, source: Path) -> str | None:
        if source.is_symlink():
            return "is a symbolic link (pass the .vst3 bundle directory itself)"
        if not source.is_dir():
            return "is not a directory (expected a .vst3 bundle)"
        return None

    def write(self, source: Path, archive: Path) -> None:
        with ZipFile(archive, "w", compression=ZIP_DEFLATED) as zf:
            add_tree(zf, source)


_STRATEGIES: dict[Platform, BundleStrategy] = {
    Platform.WINDOWS: WindowsBundler(),
    Platform.MACOS: MacosBundler(),
}


def get_strategy(platform: Platform) -> Result[BundleStrategy, UnknownPlatform]:
    strategy = _STRATEGIES.get(platform)
    if strategy is None:
        return Err(
            UnknownPlatform(
                str(platform),
                known=tuple(str(p) for p in _STRATEGIES),
                platform=platform,
                hint="no bundling strategy is registered for this platform",
            )
        )
    return Ok(strategy)


def bundle(
    source: Path,
    platform: Platform,
    destination: Path,
    *,
    version: Version,
) -> Result[ArchiveArtifact, ReleaseError]:
    """Bundle a build output into the archive at ``destination``.

    The source is only read. On failure no file is left at ``destination``
    (an existing one is kept untouched).
    """
    strategy = get_strategy(platform)
    if isinstance(strategy, Err):
        return strategy

    if not source.exists():
        return Err(BundleSourceMissing(source, platform=platform))
    problem = strategy.value.check_source(source)
    if problem is not None:
        return Err(BundleSourceMissing(source, reason=problem, platform=platform))

    try:
        with atomic_output(destination) as tmp:
            strategy.value.write(source, tmp)
        artifact = ArchiveArtifact.from_path(destination, platform=platform, version=version)
    except OSError as e:
        reason = e.strerror or str(e)
        return Err(ArchiveWriteError(destination, reason=reason, platform=platform))
    except (ValueError, struct.error, LargeZipFile) as e:
        reason = f"{type(e).__name__}: {e}"
        return Err(ArchiveWriteError(destination, reason=reason, platform=platform))

    return Ok(artifact)
