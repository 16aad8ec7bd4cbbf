"""Error types for the release pipeline.

Every error records the stage that produced it and, where known, the target
platform, so a failure in one platform's bundle is never confused with
another's.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from relpack.platform.detection import Platform

__all__ = [
    "ArchiveIntegrityError",
    "ArchiveWriteError",
    "BundleSourceMissing",
    "IncompleteRelease",
    "InvalidProductName",
    "InvalidTagFormat",
    "ManifestWriteError",
    "ReleaseError",
    "Stage",
    "UnknownPlatform",
    "format_error",
    "with_platform",
]


class Stage(Enum):
    RESOLVE = "resolve"
    NAME = "name"
    BUNDLE = "bundle"
    VERIFY = "verify"
    COMPOSE = "compose"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class InvalidTagFormat:
    tag: str
    reason: str
    platform: Platform | None = None
    hint: str | None = "tags look like v1.2.3 or v2.0.0-beta.1"
    stage: Stage = Stage.RESOLVE

    @property
    def message(self) -> str:
        return f"invalid tag {self.tag!r}: {self.reason}"


@dataclass(frozen=True, slots=True)
class UnknownPlatform:
    name: str
    known: tuple[str, ...] = ()
    platform: Platform | None = None
    hint: str | None = None
    stage: Stage = Stage.NAME

    @property
    def message(self) -> str:
        if self.known:
            return f"unknown platform: {self.name} (known: {', '.join(self.known)})"
        return f"unknown platform: {self.name}"


@dataclass(frozen=True, slots=True)
class InvalidProductName:
    product: str
    reason: str
    platform: Platform | None = None
    hint: str | None = None
    stage: Stage = Stage.NAME

    @property
    def message(self) -> str:
        return f"invalid product name {self.product!r}: {self.reason}"


@dataclass(frozen=True, slots=True)
class BundleSourceMissing:
    path: Path
    reason: str = "does not exist"
    platform: Platform | None = None
    hint: str | None = "run the plugin build for this platform first"
    stage: Stage = Stage.BUNDLE

    @property
    def message(self) -> str:
        return f"build output {self.path} {self.reason}"


@dataclass(frozen=True, slots=True)
class ArchiveWriteError:
    path: Path
    reason: str
    platform: Platform | None = None
    hint: str | None = None
    stage: Stage = Stage.BUNDLE

    @property
    def message(self) -> str:
        return f"cannot write archive {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class ArchiveIntegrityError:
    path: Path
    problems: tuple[str, ...]
    platform: Platform | None = None
    hint: str | None = None
    stage: Stage = Stage.VERIFY

    @property
    def message(self) -> str:
        return f"archive {self.path.name} failed verification ({len(self.problems)} problem(s))"


@dataclass(frozen=True, slots=True)
class IncompleteRelease:
    version: str
    missing: tuple[Platform, ...]
    platform: Platform | None = None
    hint: str | None = "bundle every required platform before composing"
    stage: Stage = Stage.COMPOSE

    @property
    def message(self) -> str:
        names = ", ".join(str(p) for p in self.missing) or "none"
        return f"release v{self.version} is missing archives for: {names}"


@dataclass(frozen=True, slots=True)
class ManifestWriteError:
    path: Path
    reason: str
    platform: Platform | None = None
    hint: str | None = None
    stage: Stage = Stage.COMPOSE

    @property
    def message(self) -> str:
        return f"cannot write manifest {self.path}: {self.reason}"


ReleaseError = (
    InvalidTagFormat
    | UnknownPlatform
    | InvalidProductName
    | BundleSourceMissing
    | ArchiveWriteError
    | ArchiveIntegrityError
    | IncompleteRelease
    | ManifestWriteError
)


def with_platform[E: ReleaseError](error: E, platform: Platform) -> E:
    """Return ``error`` tagged with ``platform`` unless it already has one."""
    if error.platform is not None:
        return error
    return dataclasses.replace(error, platform=platform)


def format_error(error: ReleaseError) -> str:
    """Render ``[stage/platform] message``."""
    where = str(error.stage)
    if error.platform is not None:
        where = f"{where}/{error.platform}"
    return f"[{where}] {error.message}"
