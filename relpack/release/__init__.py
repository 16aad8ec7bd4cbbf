"""Release packaging domain.

tag -> Version (semver) -> file name (naming) -> archive (bundler)
-> Release (compose). Each stage is a pure function over explicit inputs
returning a Result.
"""

from .archive import ArchiveEntry, extract_archive, read_entries
from .bundler import bundle
from .compose import compose
from .errors import ReleaseError, Stage, format_error
from .model import ArchiveArtifact, Release
from .naming import artifact_name
from .platforms import parse_platform
from .semver import Version, resolve_tag
from .verify import verify_archive

__all__ = [
    "ArchiveArtifact",
    "ArchiveEntry",
    "Release",
    "ReleaseError",
    "Stage",
    "Version",
    "artifact_name",
    "bundle",
    "compose",
    "extract_archive",
    "format_error",
    "parse_platform",
    "read_entries",
    "resolve_tag",
    "verify_archive",
]
