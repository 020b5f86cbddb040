"""Subprocess execution with interpreted, Result-based outcomes.

External tools (git, gh) do not express their outcomes as exceptions: the
meaning of an exit code and of the text on stdout/stderr depends on the
command. ``git pull`` exits 0 both when it fast-forwards and when there is
nothing to do; ``git branch -d`` exits 1 for "not found" which is often a
perfectly meaningful answer.

This module therefore separates two things:

- ``execute`` runs a command and returns the raw triple
  (``RawCommandResult``) even for a non-zero exit. It only fails
  (``Err(ExecutionError)``) when the command could not run at all.
- Callers decide what the raw triple means and wrap it with the decision in
  an ``InterpretedResult``. ``require_success`` is the shortcut for commands
  where any non-zero exit is fatal.

Usage:
    match execute(["git", "remote"], cwd=repo_path):
        case Ok(raw) if raw.succeeded:
            remotes = raw.stdout.split()
        case Ok(raw):
            print(f"git remote exited {raw.exit_code}")
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from mure.core.result import Err, Ok, Result

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


def _format_command(command: tuple[str, ...]) -> str:
    cmd_str = " ".join(command[:3])
    if len(command) > 3:
        cmd_str += " ..."
    return cmd_str


@dataclass(frozen=True, slots=True)
class RawCommandResult:
    """Exit status and captured output of one finished process.

    Attributes:
        command: The command that was executed
        exit_code: Process exit code (negative if killed by a signal)
        stdout: Captured standard output
        stderr: Captured standard error
    """

    command: tuple[str, ...]
    exit_code: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def interpret_to[T](self, value: T) -> InterpretedResult[T]:
        """Attach a caller-derived meaning to this output."""
        return InterpretedResult(raw=self, value=value)

    def __str__(self) -> str:
        return f"{_format_command(self.command)} (exit {self.exit_code})"


@dataclass(frozen=True, slots=True)
class InterpretedResult[T]:
    """A raw result together with what it means.

    ``value`` is what logic branches on; ``raw`` keeps the text a user may
    want to see. Both travel together so they never drift apart.
    """

    raw: RawCommandResult
    value: T


@dataclass(frozen=True, slots=True)
class CommandFailed:
    """The process ran and exited non-zero."""

    raw: RawCommandResult

    @property
    def message(self) -> str:
        detail = self.raw.stderr.strip() or self.raw.stdout.strip()
        if detail:
            return detail
        return f"{_format_command(self.raw.command)} failed (exit {self.raw.exit_code})"


@dataclass(frozen=True, slots=True)
class CouldNotExecute:
    """The process could not be started (tool missing, permission denied)."""

    command: tuple[str, ...]
    reason: str

    @property
    def message(self) -> str:
        return f"Failed to execute {self.command[0]}: {self.reason}"


@dataclass(frozen=True, slots=True)
class NoWorkingDirectory:
    """The directory the command should run in is not accessible."""

    path: Path

    @property
    def message(self) -> str:
        return f"No working directory: {self.path}"


type ExecutionError = CommandFailed | CouldNotExecute | NoWorkingDirectory


def execute(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[RawCommandResult, ExecutionError]:
    """Run a command to completion and capture its output.

    A non-zero exit is *not* an error here; it comes back as
    ``Ok(RawCommandResult)`` for the caller to interpret. There is no
    timeout and no retry.

    Args:
        cmd: Command and arguments, passed verbatim.
        cwd: Working directory; must be an existing directory.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(RawCommandResult) once the process exited,
        Err(NoWorkingDirectory) if ``cwd`` is not a directory,
        Err(CouldNotExecute) if the process could not be started.
    """
    if not cwd.is_dir():
        return Err(NoWorkingDirectory(path=cwd))

    command = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        return Err(CouldNotExecute(command=command, reason=e.strerror or str(e)))

    return Ok(
        RawCommandResult(
            command=command,
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
    )


def require_success(raw: RawCommandResult) -> Result[InterpretedResult[None], ExecutionError]:
    """Collapse a raw result: any non-zero exit becomes ``CommandFailed``."""
    if not raw.succeeded:
        return Err(CommandFailed(raw=raw))
    return Ok(raw.interpret_to(None))

