"""Post-write archive checks.

A macOS bundle whose binary lost its executable bit still unzips cleanly;
the host only fails when it tries to load the plugin. These checks read the
archive back and catch that before it is published.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path, PurePosixPath
from zipfile import BadZipFile

from relpack.core.result import Err, Ok, Result
from relpack.platform.detection import Platform
from relpack.release.archive import ArchiveEntry, read_entries
from relpack.release.errors import ArchiveIntegrityError, UnknownPlatform

__all__ = ["verify_archive"]


def _check_windows(entries: list[ArchiveEntry]) -> list[str]:
    files = [e for e in entries if not e.is_dir]
    if len(files) != 1:
        return [f"expected exactly one file, found {len(files)}"]
    if "/" in files[0].name:
        return [f"{files[0].name}: not at the archive root"]
    return []


def _is_bundle_binary(entry: ArchiveEntry) -> bool:
    parts = PurePosixPath(entry.name).parts
    return len(parts) >= 3 and parts[-2] == "MacOS" and parts[-3] == "Contents"


def _check_macos(entries: list[ArchiveEntry]) -> list[str]:
    problems: list[str] = []
    if not entries:
        return ["archive is empty"]

    roots = {PurePosixPath(e.name).parts[0] for e in entries}
    if len(roots) != 1:
        problems.append(f"expected a single bundle root, found {len(roots)}")

    for entry in entries:
        if not entry.unix:
            problems.append(f"{entry.name}: no Unix metadata (modes and links are lost)")
        elif not entry.is_dir and not entry.is_symlink and _is_bundle_binary(entry):
            if not entry.is_executable:
                problems.append(f"{entry.name}: executable bit missing")
    return problems


_CHECKS: dict[Platform, Callable[[list[ArchiveEntry]], list[str]]] = {
    Platform.WINDOWS: _check_windows,
    Platform.MACOS: _check_macos,
}


def verify_archive(
    archive: Path,
    platform: Platform,
) -> Result[list[ArchiveEntry], ArchiveIntegrityError | UnknownPlatform]:
    check = _CHECKS.get(platform)
    if check is None:
        return Err(UnknownPlatform(str(platform), platform=platform))

    try:
        entries = read_entries(archive)
    except (OSError, BadZipFile) as e:
        problem = f"cannot read archive: {e}"
        return Err(ArchiveIntegrityError(archive, (problem,), platform=platform))

    problems = check(entries)
    if problems:
        return Err(ArchiveIntegrityError(archive, tuple(problems), platform=platform))
    return Ok(entries)
