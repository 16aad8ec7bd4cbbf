"""Release manifest generation.

The manifest records each archive's file name, platform, size and sha256 so a
publishing step can upload and later check exactly what was composed.
"""

from __future__ import annotations

import json
from pathlib import Path

from relpack.core.result import Err, Ok, Result
from relpack.platform.files import atomic_write_text
from relpack.release.errors import ManifestWriteError
from relpack.release.model import Release
from relpack.release.platforms import platform_id

MANIFEST_SCHEMA = 1


def build_manifest(release: Release, *, product: str | None = None) -> dict[str, object]:
    return {
        "schema": MANIFEST_SCHEMA,
        "product": product,
        "tag": release.tag,
        "version": str(release.version),
        "prerelease": release.version.is_prerelease,
        "title": release.title,
        "assets": [
            {
                "filename": a.filename,
                "platform": str(a.platform),
                "platform_id": platform_id(a.platform),
                "size": a.size,
                "sha256": a.sha256,
            }
            for a in sorted(release.artifacts, key=lambda a: a.filename)
        ],
    }


def write_manifest(release: Release, out_path: Path, *, product: str | None = None) -> Path:
    """Write ``manifest.json`` for a composed release atomically."""
    manifest = build_manifest(release, product=product)
    atomic_write_text(out_path, json.dumps(manifest, indent=2, sort_keys=True) + "\n")
    return out_path


def save_manifest(
    release: Release, out_path: Path, *, product: str | None = None
) -> Result[Path, ManifestWriteError]:
    """Like write_manifest, but an unwritable path is returned as an error."""
    try:
        return Ok(write_manifest(release, out_path, product=product))
    except OSError as e:
        return Err(ManifestWriteError(out_path, reason=e.strerror or str(e)))


def read_manifest(path: Path) -> dict[str, object]:
    return json.loads(path.read_text(encoding="utf-8"))
