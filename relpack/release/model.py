from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relpack.platform.detection import Platform
from relpack.platform.files import sha256_file
from relpack.release.semver import Version


@dataclass(frozen=True, slots=True)
class ArchiveArtifact:
    """A written, named archive for one platform."""

    path: Path
    platform: Platform
    version: Version
    size: int
    sha256: str

    @property
    def filename(self) -> str:
        return self.path.name

    @classmethod
    def from_path(cls, path: Path, *, platform: Platform, version: Version) -> ArchiveArtifact:
        return cls(
            path=path,
            platform=platform,
            version=version,
            size=path.stat().st_size,
            sha256=sha256_file(path),
        )


@dataclass(frozen=True, slots=True)
class Release:
    version: Version
    title: str
    artifacts: tuple[ArchiveArtifact, ...]

    @property
    def tag(self) -> str:
        return self.version.to_tag()

    @property
    def platforms(self) -> frozenset[Platform]:
        return frozenset(a.platform for a in self.artifacts)

    def artifact_for(self, platform: Platform) -> ArchiveArtifact | None:
        return next((a for a in self.artifacts if a.platform == platform), None)
