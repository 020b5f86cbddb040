"""Exit codes for mure commands.

The numeric values are process exit codes and should remain stable:
- 0: Success
- 1: User error (bad URL, unknown repository name, bad arguments)
- 2: Environment error (git/gh missing, no config, unreadable workspace)
- 3: Git error (a repository could not be refreshed or cloned)
- 5: I/O error (symlink or config file could not be written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
