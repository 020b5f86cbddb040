"""Platform abstraction layer."""

from .process import (
    CommandFailed,
    CouldNotExecute,
    ExecutionError,
    InterpretedResult,
    NoWorkingDirectory,
    RawCommandResult,
    execute,
    require_success,
)

__all__ = [
    "CommandFailed",
    "CouldNotExecute",
    "ExecutionError",
    "InterpretedResult",
    "NoWorkingDirectory",
    "RawCommandResult",
    "execute",
    "require_success",
]
