"""Tag to semantic version resolution.

A release tag is ``v`` followed by a SemVer 2.0.0 string. Exactly one leading
lowercase ``v`` is stripped; everything after it must parse as SemVer, and
formatting the result with ``to_tag()`` reproduces the original tag.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from relpack.core.result import Err, Ok, Result
from relpack.release.errors import InvalidTagFormat

__all__ = ["TAG_PREFIX", "Version", "parse_version", "resolve_tag"]

TAG_PREFIX = "v"

_NUM = r"0|[1-9][0-9]*"
_PRE_ID = r"0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*"
_BUILD_ID = r"[0-9A-Za-z-]+"

_SEMVER_RE = re.compile(
    rf"(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})"
    rf"(?:-(?P<prerelease>(?:{_PRE_ID})(?:\.(?:{_PRE_ID}))*))?"
    rf"(?:\+(?P<build>{_BUILD_ID}(?:\.{_BUILD_ID})*))?"
)


@total_ordering
@dataclass(frozen=True, slots=True)
class Version:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is not None:
            text += f"-{self.prerelease}"
        if self.build is not None:
            text += f"+{self.build}"
        return text

    def to_tag(self) -> str:
        return f"{TAG_PREFIX}{self}"

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def _precedence(self) -> tuple[int, int, int, bool, tuple[tuple[int, int, str], ...]]:
        # Numeric identifiers sort before alphanumeric ones; a release sorts
        # after all of its pre-releases. Build metadata never participates.
        ids: tuple[tuple[int, int, str], ...] = ()
        if self.prerelease is not None:
            ids = tuple(
                (0, int(part), "") if part.isdigit() else (1, 0, part)
                for part in self.prerelease.split(".")
            )
        return (self.major, self.minor, self.patch, self.prerelease is None, ids)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() < other._precedence()


def parse_version(text: str) -> Version | None:
    """Parse a bare SemVer string (no ``v``); None if invalid."""
    m = _SEMVER_RE.fullmatch(text)
    if m is None:
        return None
    return Version(
        major=int(m.group("major")),
        minor=int(m.group("minor")),
        patch=int(m.group("patch")),
        prerelease=m.group("prerelease"),
        build=m.group("build"),
    )


def _explain(remainder: str) -> str:
    core = re.split(r"[-+]", remainder, maxsplit=1)[0]
    parts = core.split(".")
    if len(parts) != 3:
        return f"expected major.minor.patch, got {len(parts)} segment(s)"
    for part in parts:
        if not part.isascii() or not part.isdigit():
            return f"version segment {part!r} is not numeric"
        if len(part) > 1 and part.startswith("0"):
            return f"version segment {part!r} has a leading zero"
    return "invalid pre-release or build suffix"


def resolve_tag(tag: str) -> Result[Version, InvalidTagFormat]:
    """Resolve a ``v``-prefixed tag into a Version.

    The prefix check is case sensitive and mandatory: ``V1.2.3`` and
    ``1.2.3`` are both rejected.
    """
    if not tag.startswith(TAG_PREFIX):
        if tag.startswith("V"):
            return Err(InvalidTagFormat(tag, "prefix must be a lowercase 'v'"))
        return Err(InvalidTagFormat(tag, "tag must start with 'v'"))

    remainder = tag[len(TAG_PREFIX) :]
    version = parse_version(remainder)
    if version is None:
        return Err(InvalidTagFormat(tag, _explain(remainder)))
    return Ok(version)
