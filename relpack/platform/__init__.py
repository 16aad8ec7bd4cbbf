"""Platform abstraction layer."""

from .detection import (
    Platform,
    detect_platform,
    is_windows,
)
from .files import (
    atomic_output,
    atomic_write_text,
    sha256_file,
)

__all__ = [
    # detection
    "Platform",
    "detect_platform",
    "is_windows",
    # files
    "atomic_output",
    "atomic_write_text",
    "sha256_file",
]
