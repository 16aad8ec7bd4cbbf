"""Packaging pipeline: tag + build outputs -> named archives.

``package`` runs resolve -> name -> bundle for one platform, the way a CI job
per platform would. ``bundle_all`` runs several platforms at once; each job
only touches its own source and destination, so one failing platform leaves
the others' archives intact. ``compose`` is the join point after it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from relpack.core.result import Err, Ok, Result
from relpack.platform.detection import Platform
from relpack.release.bundler import bundle
from relpack.release.errors import ArchiveWriteError, ReleaseError, with_platform
from relpack.release.model import ArchiveArtifact
from relpack.release.naming import artifact_name
from relpack.release.semver import Version, resolve_tag

__all__ = [
    "BundleJob",
    "bundle_all",
    "discover_artifacts",
    "package",
]


@dataclass(frozen=True, slots=True)
class BundleJob:
    platform: Platform
    source: Path
    destination: Path


def package(
    *,
    tag: str,
    product: str,
    platform: Platform,
    source: Path,
    dest_dir: Path,
) -> Result[ArchiveArtifact, ReleaseError]:
    """Resolve the tag, name the archive and bundle ``source`` into ``dest_dir``."""
    resolved = resolve_tag(tag).map_err(lambda e: with_platform(e, platform))
    if isinstance(resolved, Err):
        return resolved
    version = resolved.value

    name = artifact_name(product, version, platform)
    if isinstance(name, Err):
        return name

    return bundle(source, platform, dest_dir / name.value, version=version)


def _run_job(job: BundleJob, version: Version) -> Result[ArchiveArtifact, ReleaseError]:
    try:
        return bundle(job.source, job.platform, job.destination, version=version)
    except Exception as e:  # noqa: BLE001
        return Err(
            ArchiveWriteError(
                job.destination,
                reason=f"unexpected {type(e).__name__}: {e}",
                platform=job.platform,
            )
        )


def bundle_all(
    jobs: Sequence[BundleJob],
    *,
    version: Version,
    max_workers: int | None = None,
) -> dict[Platform, Result[ArchiveArtifact, ReleaseError]]:
    """Bundle every job in parallel and wait for all of them.

    Raises ValueError if two jobs target the same platform or destination.
    """
    platforms = [job.platform for job in jobs]
    if len(set(platforms)) != len(platforms):
        raise ValueError("each platform may appear in only one bundle job")
    destinations = [job.destination.resolve() for job in jobs]
    if len(set(destinations)) != len(destinations):
        raise ValueError("bundle jobs must write to distinct destinations")

    results: dict[Platform, Result[ArchiveArtifact, ReleaseError]] = {}
    if not jobs:
        return results

    with ThreadPoolExecutor(max_workers=max_workers or len(jobs)) as executor:
        futures = {executor.submit(_run_job, job, version): job for job in jobs}
        for future in as_completed(futures):
            results[futures[future].platform] = future.result()
    return results


def discover_artifacts(
    dist_dir: Path,
    *,
    product: str,
    version: Version,
    platforms: Iterable[Platform],
) -> Result[list[ArchiveArtifact], ReleaseError]:
    """Find already-written canonical archives in ``dist_dir``.

    Platforms whose archive is absent are skipped; composing decides whether
    that makes the release incomplete.
    """
    found: list[ArchiveArtifact] = []
    for platform in platforms:
        name = artifact_name(product, version, platform)
        if isinstance(name, Err):
            return name
        path = dist_dir / name.value
        if path.is_file():
            found.append(ArchiveArtifact.from_path(path, platform=platform, version=version))
    return Ok(found)
