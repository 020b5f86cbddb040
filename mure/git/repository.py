"""Git repository abstraction.

``Repository`` gives names to the handful of git commands mure needs and
interprets their output. Each method returns a Result; most successful
values are ``InterpretedResult`` so callers keep git's own text around for
display.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.pull_ff("origin", "main"):
        case Ok(out) if out.value is FastForwardOutcome.FAST_FORWARDED:
            print(out.raw.stdout)
        case Ok(_):
            print("nothing pulled")
        case Err(e):
            print(f"Pull failed: {e.message}")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from mure.core.result import Err, Ok, Result
from mure.git.outcomes import FastForwardOutcome, classify_pull, split_lines, status_has_changes
from mure.git.runner import GitRunner, SubprocessGit
from mure.platform.process import (
    ExecutionError,
    InterpretedResult,
    RawCommandResult,
    require_success,
)

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Repository state that makes an operation meaningless.

    Attributes:
        command: The operation that was attempted
        message: Error message
    """

    command: str
    message: str


class Repository:
    """A git working tree.

    Attributes:
        path: Path to the working tree root
    """

    def __init__(self, path: Path, git: GitRunner | None = None) -> None:
        self.path = path
        self._git: GitRunner = git or SubprocessGit()

    @classmethod
    def open(
        cls, path: Path, git: GitRunner | None = None
    ) -> Result[Repository, ExecutionError | GitError]:
        """Open the working tree at ``path``.

        Fails if git does not recognise ``path`` as a working tree.
        """
        repo = cls(path, git)
        result = repo.command(["rev-parse", "--is-inside-work-tree"])
        if isinstance(result, Err):
            return result
        raw = result.value
        if not raw.succeeded or raw.stdout.strip() != "true":
            return Err(
                GitError(
                    command="open",
                    message=raw.stderr.strip() or f"{path} is not a git working tree",
                )
            )
        return Ok(repo)

    @staticmethod
    def clone(
        url: str, into: Path, git: GitRunner | None = None
    ) -> Result[InterpretedResult[None], ExecutionError]:
        """Run ``git clone <url>`` inside the directory ``into``."""
        runner: GitRunner = git or SubprocessGit()
        return runner.execute(into, ["clone", url]).flat_map(require_success)

    def has_git_dir(self) -> bool:
        """True if the path holds git metadata (a ``.git`` dir or file)."""
        return (self.path / ".git").exists()

    def has_unsaved(self) -> Result[bool, ExecutionError]:
        """True if anything is new, modified or deleted in the index or tree."""
        result = self._checked(["status", "--porcelain=v1", "--untracked-files=all"])
        if isinstance(result, Err):
            return result
        return Ok(status_has_changes(result.value.raw.stdout))

    def is_clean(self) -> Result[bool, ExecutionError]:
        return self.has_unsaved().map(lambda unsaved: not unsaved)

    def has_remote(self) -> Result[bool, ExecutionError]:
        """True if at least one remote is configured."""
        result = self._checked(["remote"])
        if isinstance(result, Err):
            return result
        return Ok(bool(split_lines(result.value.raw.stdout)))

    def is_empty(self) -> Result[bool, ExecutionError]:
        """True if the repository has no commits yet."""
        result = self.command(["rev-parse", "--verify", "--quiet", "HEAD"])
        if isinstance(result, Err):
            return result
        return Ok(not result.value.succeeded)

    def current_branch(self) -> Result[str, ExecutionError | GitError]:
        """Name of the checked-out branch.

        Fails when there are no commits yet or HEAD is detached.
        """
        empty = self.is_empty()
        if isinstance(empty, Err):
            return empty
        if empty.value:
            return Err(GitError(command="current_branch", message="repository is empty"))

        result = self.command(["symbolic-ref", "--quiet", "--short", "HEAD"])
        if isinstance(result, Err):
            return result
        name = result.value.stdout.strip()
        if not result.value.succeeded or not name:
            return Err(GitError(command="current_branch", message="HEAD is not a branch"))
        return Ok(name)

    def fetch_prune(self) -> Result[InterpretedResult[None], ExecutionError]:
        """Fetch remotes and drop remote-tracking refs that no longer exist."""
        return self._checked(["fetch", "--prune"])

    def switch(self, branch: str) -> Result[InterpretedResult[None], ExecutionError]:
        """Check out an existing local branch."""
        return self._checked(["switch", branch])

    def pull_ff(
        self, remote: str, branch: str
    ) -> Result[InterpretedResult[FastForwardOutcome], ExecutionError]:
        """Fast-forward-only pull of ``remote/branch``.

        A pull that cannot fast-forward is not an error: it comes back as
        ``FastForwardOutcome.ABORTED`` and leaves local commits untouched.
        """
        result = self.command(["pull", "--ff-only", remote, branch])
        if isinstance(result, Err):
            return result
        raw = result.value
        return Ok(raw.interpret_to(classify_pull(raw)))

    def merged_branches(self) -> Result[InterpretedResult[list[str]], ExecutionError]:
        """Local branches whose tip is reachable from HEAD."""
        result = self._checked(
            ["for-each-ref", "--merged", "HEAD", "--format=%(refname:short)", "refs/heads/"]
        )
        if isinstance(result, Err):
            return result
        raw = result.value.raw
        return Ok(raw.interpret_to(split_lines(raw.stdout)))

    def delete_branch(self, branch: str) -> Result[InterpretedResult[None], ExecutionError]:
        """``git branch -d``; fails if missing or not fully merged."""
        return self._checked(["branch", "-d", branch])

    def command(self, args: Sequence[str]) -> Result[RawCommandResult, ExecutionError]:
        """Run a git command in this repository, returning the raw output."""
        return self._git.execute(self.path, args)

    def _checked(self, args: Sequence[str]) -> Result[InterpretedResult[None], ExecutionError]:
        return self.command(args).flat_map(require_success)

