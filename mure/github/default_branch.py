"""Default-branch lookup through the GitHub CLI.

The refresh engine treats this as an opaque lookup that may fail; it only
depends on the ``DefaultBranchResolver`` protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from mure.core.result import Err, Ok, Result
from mure.platform.process import CouldNotExecute, execute

__all__ = ["DefaultBranchError", "DefaultBranchResolver", "GhDefaultBranchResolver"]


@dataclass(frozen=True, slots=True)
class DefaultBranchError:
    message: str
    hint: str | None = None


class DefaultBranchResolver(Protocol):
    def default_branch(self, repo_path: Path) -> Result[str, DefaultBranchError]: ...


class GhDefaultBranchResolver:
    """Ask ``gh repo view`` for the default branch of the repo at a path."""

    def __init__(self, executable: str = "gh") -> None:
        self._executable = executable

    def default_branch(self, repo_path: Path) -> Result[str, DefaultBranchError]:
        cmd = [
            self._executable,
            "repo",
            "view",
            "--json",
            "defaultBranchRef",
            "--jq",
            ".defaultBranchRef.name",
        ]
        result = execute(cmd, cwd=repo_path)
        if isinstance(result, Err):
            error = result.error
            hint = (
                "Install the GitHub CLI: https://cli.github.com"
                if isinstance(error, CouldNotExecute)
                else None
            )
            return Err(DefaultBranchError(error.message, hint=hint))

        raw = result.value
        if not raw.succeeded:
            return Err(
                DefaultBranchError(
                    raw.stderr.strip() or f"gh repo view failed (exit {raw.exit_code})"
                )
            )

        branch = raw.stdout.strip()
        if not branch:
            return Err(DefaultBranchError(f"could not determine default branch of {repo_path}"))
        return Ok(branch)
