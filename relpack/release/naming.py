"""Canonical archive file names.

``<product>-v<version>-<suffix>.zip``; pre-release and build text is kept
verbatim. The name depends only on its three inputs.
"""

from __future__ import annotations

from relpack.core.result import Err, Ok, Result
from relpack.platform.detection import Platform
from relpack.release.errors import InvalidProductName, UnknownPlatform
from relpack.release.platforms import archive_suffix
from relpack.release.semver import Version

__all__ = ["ARCHIVE_EXTENSION", "artifact_name", "validate_product"]

ARCHIVE_EXTENSION = ".zip"


def validate_product(product: str) -> InvalidProductName | None:
    if not product.strip():
        return InvalidProductName(product, "must not be empty")
    if product != product.strip():
        return InvalidProductName(product, "must not have surrounding whitespace")
    if "/" in product or "\\" in product:
        return InvalidProductName(product, "must not contain a path separator")
    return None


def artifact_name(
    product: str,
    version: Version,
    platform: Platform,
) -> Result[str, UnknownPlatform | InvalidProductName]:
    problem = validate_product(product)
    if problem is not None:
        return Err(InvalidProductName(product, problem.reason, platform=platform))

    suffix = archive_suffix(platform)
    if isinstance(suffix, Err):
        return suffix
    return Ok(f"{product}-{version.to_tag()}-{suffix.value}{ARCHIVE_EXTENSION}")
