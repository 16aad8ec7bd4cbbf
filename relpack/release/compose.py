from __future__ import annotations

from collections.abc import Iterable

from relpack.core.result import Err, Ok, Result
from relpack.platform.detection import Platform
from relpack.release.errors import IncompleteRelease
from relpack.release.model import ArchiveArtifact, Release
from relpack.release.semver import Version

__all__ = ["compose", "release_title"]


def release_title(version: Version) -> str:
    return f"Release {version.to_tag()}"


def compose(
    version: Version,
    artifacts: Iterable[ArchiveArtifact],
    required_platforms: Iterable[Platform],
) -> Result[Release, IncompleteRelease]:
    """Assemble a Release once every required platform has an archive.

    Artifacts built for another version do not count towards coverage and
    are left out of the release.
    """
    matching = sorted(
        {a for a in artifacts if a.version == version},
        key=lambda a: (a.filename, str(a.platform)),
    )
    covered = {a.platform for a in matching}
    missing = sorted(set(required_platforms) - covered, key=str)
    if missing:
        return Err(IncompleteRelease(str(version), tuple(missing)))

    return Ok(Release(version=version, title=release_title(version), artifacts=tuple(matching)))
