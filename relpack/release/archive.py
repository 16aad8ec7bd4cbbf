"""Zip member writing and reading with Unix metadata.

Python's ``ZipFile.write`` follows symbolic links and ``extractall`` drops
both links and permission bits. Plugin bundles need all three kept intact, so
members are written with explicit ``ZipInfo`` records (``create_system = 3``,
``st_mode`` in the high 16 bits of ``external_attr``) and read back the way
Info-ZIP's ``unzip`` does.
"""

from __future__ import annotations

import os
import shutil
import stat
import time
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile, ZipInfo

__all__ = [
    "ArchiveEntry",
    "UNIX_SYSTEM",
    "add_tree",
    "extract_archive",
    "iter_tree",
    "read_entries",
]

UNIX_SYSTEM = 3
_MSDOS_DIR_FLAG = 0x10
_CHUNK = 1024 * 1024


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    name: str
    mode: int
    size: int
    unix: bool
    link_target: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.name.endswith("/")

    @property
    def is_symlink(self) -> bool:
        return self.link_target is not None

    @property
    def is_executable(self) -> bool:
        return bool(self.mode & 0o111)

    @property
    def permissions(self) -> int:
        return stat.S_IMODE(self.mode)


def _date_time(mtime: float) -> tuple[int, int, int, int, int, int]:
    # Zip timestamps cover 1980 through 2107.
    t = time.localtime(mtime)[:6]
    if t[0] < 1980:
        return (1980, 1, 1, 0, 0, 0)
    if t[0] > 2107:
        return (2107, 12, 31, 23, 59, 58)
    return (t[0], t[1], t[2], t[3], t[4], t[5])


def _unix_info(arcname: str, st: os.stat_result) -> ZipInfo:
    info = ZipInfo(arcname, date_time=_date_time(st.st_mtime))
    info.create_system = UNIX_SYSTEM
    info.external_attr = (st.st_mode & 0xFFFF) << 16
    return info


def iter_tree(root: Path) -> Iterator[Path]:
    """Yield ``root`` and everything under it in sorted order.

    Symbolic links are yielded but never descended into.
    """
    yield root
    for child in sorted(root.iterdir(), key=lambda p: p.name):
        if child.is_dir() and not child.is_symlink():
            yield from iter_tree(child)
        else:
            yield child


def add_tree(zf: ZipFile, root: Path) -> int:
    """Add the directory ``root`` (as ``<root.name>/``) with links and modes kept.

    Returns the number of members written.
    """
    count = 0
    for path in iter_tree(root):
        rel = path.relative_to(root.parent).as_posix()
        st = path.lstat()

        if stat.S_ISLNK(st.st_mode):
            info = _unix_info(rel, st)
            info.compress_type = ZIP_STORED
            zf.writestr(info, os.readlink(path))
        elif stat.S_ISDIR(st.st_mode):
            info = _unix_info(rel + "/", st)
            info.external_attr |= _MSDOS_DIR_FLAG
            info.compress_type = ZIP_STORED
            zf.writestr(info, b"")
        else:
            info = _unix_info(rel, st)
            info.compress_type = ZIP_DEFLATED
            info.file_size = st.st_size
            with path.open("rb") as src, zf.open(info, "w") as dst:
                shutil.copyfileobj(src, dst, _CHUNK)
        count += 1
    return count


def _entry(zf: ZipFile, info: ZipInfo) -> ArchiveEntry:
    unix = info.create_system == UNIX_SYSTEM
    mode = info.external_attr >> 16 if unix else 0
    link_target: str | None = None
    if unix and stat.S_ISLNK(mode):
        link_target = zf.read(info).decode("utf-8")
    return ArchiveEntry(
        name=info.filename,
        mode=mode,
        size=info.file_size,
        unix=unix,
        link_target=link_target,
    )


def read_entries(archive: Path) -> list[ArchiveEntry]:
    """List archive members with their Unix metadata."""
    with ZipFile(archive) as zf:
        return [_entry(zf, info) for info in zf.infolist()]


def _safe_target(dest: Path, name: str) -> Path:
    member = PurePosixPath(name)
    if member.is_absolute() or ".." in member.parts or ":" in name:
        raise ValueError(f"unsafe archive member: {name}")
    return dest.joinpath(*member.parts)


def _is_inside(root: Path, path: Path) -> bool:
    return path == root or root in path.parents


def _check_placement(root: Path, target: Path, entry: ArchiveEntry) -> None:
    # Earlier link members must not redirect later members out of the tree.
    parent = target.parent.resolve()
    if not _is_inside(root, parent) or target.is_symlink():
        raise ValueError(f"unsafe archive member: {entry.name}")
    if entry.link_target is not None:
        pointee = Path(os.path.normpath(parent / entry.link_target))
        if not _is_inside(root, pointee):
            raise ValueError(f"unsafe link target: {entry.name} -> {entry.link_target}")


def extract_archive(archive: Path, dest: Path) -> list[Path]:
    """Extract ``archive`` into ``dest`` recreating links and permission bits.

    Raises ValueError for members, or link targets, that would land outside
    ``dest``.
    """
    dest.mkdir(parents=True, exist_ok=True)
    root = dest.resolve()
    created: list[Path] = []
    dir_modes: list[tuple[Path, int]] = []

    with ZipFile(archive) as zf:
        for info in zf.infolist():
            target = _safe_target(dest, info.filename)
            entry = _entry(zf, info)
            _check_placement(root, target, entry)

            if entry.is_dir:
                target.mkdir(parents=True, exist_ok=True)
                if entry.unix:
                    dir_modes.append((target, entry.permissions))
            elif entry.link_target is not None:
                target.parent.mkdir(parents=True, exist_ok=True)
                os.symlink(entry.link_target, target)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, target.open("wb") as dst:
                    shutil.copyfileobj(src, dst, _CHUNK)
                if entry.unix and entry.permissions:
                    os.chmod(target, entry.permissions)
            created.append(target)

    # Deepest first, so a read-only directory does not block its children.
    for path, mode in reversed(dir_modes):
        if mode:
            os.chmod(path, mode)
    return created
