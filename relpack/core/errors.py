"""Error codes for CLI exit status.

Each failure kind of the packaging pipeline gets its own exit code so CI jobs
can tell a bad tag apart from a missing build output or a failed write.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    USER_ERROR = 1
    INVALID_TAG = 2
    UNKNOWN_PLATFORM = 3
    SOURCE_MISSING = 4
    WRITE_ERROR = 5
    INCOMPLETE_RELEASE = 6
    INTEGRITY_ERROR = 7

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
