"""How git gets executed.

Repository operations never spawn git themselves; they go through a
``GitRunner``. The only implementation runs the ``git`` binary, but tests and
alternative backends can substitute their own.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from mure.core.result import Result
from mure.platform.process import ExecutionError, RawCommandResult, execute

__all__ = ["GitRunner", "SubprocessGit"]


class GitRunner(Protocol):
    """Runs one git command in a working directory."""

    def execute(
        self, workdir: Path, args: Sequence[str]
    ) -> Result[RawCommandResult, ExecutionError]: ...


class SubprocessGit:
    """Runs the ``git`` executable, one process per command.

    Git runs with ``LC_ALL=C`` so that its messages match what
    ``mure.git.outcomes`` looks for.
    """

    def __init__(self, executable: str = "git") -> None:
        self._executable = executable

    def execute(
        self, workdir: Path, args: Sequence[str]
    ) -> Result[RawCommandResult, ExecutionError]:
        env = dict(os.environ)
        env["LC_ALL"] = "C"
        return execute([self._executable, *args], cwd=workdir, env=env)
