"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relpack.core.errors import ErrorCode
from relpack.output.console import Style
from relpack.release.errors import (
    ArchiveIntegrityError,
    ArchiveWriteError,
    BundleSourceMissing,
    IncompleteRelease,
    InvalidProductName,
    InvalidTagFormat,
    ManifestWriteError,
    ReleaseError,
    UnknownPlatform,
    format_error,
)

if TYPE_CHECKING:
    from relpack.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print ``[stage/platform] message`` plus any details and hint."""
    console.error(format_error(error))
    match error:
        case ArchiveIntegrityError(problems=problems):
            for problem in problems:
                console.print(f"  {problem}", Style.DIM)
        case IncompleteRelease(missing=missing) if missing:
            console.print(f"missing: {', '.join(str(p) for p in missing)}", Style.DIM)
        case _:
            pass
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error:
        case InvalidTagFormat():
            return int(ErrorCode.INVALID_TAG)
        case UnknownPlatform():
            return int(ErrorCode.UNKNOWN_PLATFORM)
        case InvalidProductName():
            return int(ErrorCode.USER_ERROR)
        case BundleSourceMissing():
            return int(ErrorCode.SOURCE_MISSING)
        case ArchiveWriteError() | ManifestWriteError():
            return int(ErrorCode.WRITE_ERROR)
        case IncompleteRelease():
            return int(ErrorCode.INCOMPLETE_RELEASE)
        case ArchiveIntegrityError():
            return int(ErrorCode.INTEGRITY_ERROR)
