"""Services that sequence the release domain for the CLI."""

from .manifest import build_manifest, read_manifest, save_manifest, write_manifest
from .pipeline import BundleJob, bundle_all, discover_artifacts, package

__all__ = [
    # manifest
    "build_manifest",
    "read_manifest",
    "save_manifest",
    "write_manifest",
    # pipeline
    "BundleJob",
    "bundle_all",
    "discover_artifacts",
    "package",
]
