"""Refresh one repository against its upstream default branch.

The sequence for a repository at ``path``:

1. No ``.git``               -> Skipped(NOT_A_GIT_REPOSITORY)
2. Open the working tree     (failure is an error, not a skip)
3. No remote configured      -> Skipped(NO_REMOTE)
   No commits yet            -> Skipped(EMPTY_REPOSITORY)
4. Resolve the default branch
5. ``git fetch --prune``
6. If the working tree is clean, switch to the default branch.
   Uncommitted work is never interrupted.
7. ``git pull --ff-only origin <default>``. A pull that cannot
   fast-forward is reported by omission, never resolved.
8. Delete every local branch already merged into HEAD, except the default
   branch and the checked-out branch.

Every step that fails stops the sequence and returns ``Err(RefreshError)``;
whatever earlier steps changed stays changed.

Known limitation: the remote is always ``origin``. Repositories with several
remotes are synchronized against ``origin`` only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal

from mure.core.result import Err, Ok, Result
from mure.core.verbosity import Verbosity
from mure.git.outcomes import FastForwardOutcome
from mure.git.repository import GitError, Repository
from mure.git.runner import GitRunner
from mure.github.default_branch import DefaultBranchError, DefaultBranchResolver
from mure.platform.process import ExecutionError, InterpretedResult

__all__ = [
    "REMOTE",
    "RefreshError",
    "RefreshOutcome",
    "SkipReason",
    "Skipped",
    "Updated",
    "refresh",
    "skip_message",
]

REMOTE = "origin"

RefreshErrorKind = Literal[
    "open_failed",
    "inspect_failed",
    "default_branch_unavailable",
    "fetch_failed",
    "switch_failed",
    "pull_failed",
    "list_merged_failed",
    "delete_failed",
    "unexpected",
]


class SkipReason(Enum):
    NOT_A_GIT_REPOSITORY = "not a git repository"
    EMPTY_REPOSITORY = "empty repository"
    NO_REMOTE = "no remote"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Skipped:
    """Nothing to synchronize; not an error."""

    reason: SkipReason


@dataclass(frozen=True, slots=True)
class Updated:
    """The sequence ran to the end.

    Attributes:
        switched_to_default_branch: True if HEAD moved from another branch
            to the default branch
        transcript: Human-readable lines, in order
    """

    switched_to_default_branch: bool
    transcript: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return "\n".join(self.transcript)


type RefreshOutcome = Skipped | Updated


@dataclass(frozen=True, slots=True)
class RefreshError:
    """A step failed; the remaining steps were not run."""

    kind: RefreshErrorKind
    message: str
    hint: str | None = None


def skip_message(name: str, reason: SkipReason) -> str:
    match reason:
        case SkipReason.NOT_A_GIT_REPOSITORY:
            return f"{name} is not a git repository"
        case SkipReason.EMPTY_REPOSITORY:
            return f"{name} has no commits yet"
        case SkipReason.NO_REMOTE:
            return f"{name} has no remote"


def _fail(
    kind: RefreshErrorKind, error: ExecutionError | GitError | DefaultBranchError
) -> Err[RefreshError]:
    return Err(RefreshError(kind=kind, message=error.message, hint=getattr(error, "hint", None)))


def _pull_lines(
    pulled: InterpretedResult[FastForwardOutcome], verbosity: Verbosity
) -> list[str]:
    match pulled.value:
        case FastForwardOutcome.ALREADY_UP_TO_DATE:
            status = "Already up to date"
        case FastForwardOutcome.FAST_FORWARDED:
            status = "Fast-forwarded"
        case FastForwardOutcome.ABORTED:
            return []

    if verbosity is Verbosity.QUIET:
        return []
    lines = [status]
    if verbosity is Verbosity.VERBOSE:
        lines.extend(
            text.rstrip("\n") for text in (pulled.raw.stderr, pulled.raw.stdout) if text.strip()
        )
    return lines


def refresh(
    path: Path,
    *,
    resolver: DefaultBranchResolver,
    verbosity: Verbosity = Verbosity.NORMAL,
    git: GitRunner | None = None,
) -> Result[RefreshOutcome, RefreshError]:
    """Bring the repository at ``path`` up to date with its default branch."""
    if not Repository(path, git).has_git_dir():
        return Ok(Skipped(SkipReason.NOT_A_GIT_REPOSITORY))

    opened = Repository.open(path, git)
    if isinstance(opened, Err):
        return _fail("open_failed", opened.error)
    repo = opened.value

    has_remote = repo.has_remote()
    if isinstance(has_remote, Err):
        return _fail("inspect_failed", has_remote.error)
    if not has_remote.value:
        return Ok(Skipped(SkipReason.NO_REMOTE))

    empty = repo.is_empty()
    if isinstance(empty, Err):
        return _fail("inspect_failed", empty.error)
    if empty.value:
        return Ok(Skipped(SkipReason.EMPTY_REPOSITORY))

    default = resolver.default_branch(path)
    if isinstance(default, Err):
        return _fail("default_branch_unavailable", default.error)
    default_branch = default.value

    fetched = repo.fetch_prune()
    if isinstance(fetched, Err):
        return _fail("fetch_failed", fetched.error)

    transcript: list[str] = []
    switched = False

    clean = repo.is_clean()
    if isinstance(clean, Err):
        return _fail("inspect_failed", clean.error)
    if clean.value:
        before = repo.current_branch().unwrap_or(None)
        switch = repo.switch(default_branch)
        if isinstance(switch, Err):
            return _fail("switch_failed", switch.error)
        switched = before != default_branch
        transcript.append(f"Switched to {default_branch}")

    pulled = repo.pull_ff(REMOTE, default_branch)
    if isinstance(pulled, Err):
        return _fail("pull_failed", pulled.error)
    transcript.extend(_pull_lines(pulled.value, verbosity))

    merged = repo.merged_branches()
    if isinstance(merged, Err):
        return _fail("list_merged_failed", merged.error)
    checked_out = repo.current_branch().unwrap_or(None)

    for branch in merged.value.value:
        if branch == default_branch or branch == checked_out:
            continue
        deleted = repo.delete_branch(branch)
        if isinstance(deleted, Err):
            return _fail("delete_failed", deleted.error)
        transcript.append(f"Deleted branch {branch}")

    return Ok(Updated(switched_to_default_branch=switched, transcript=tuple(transcript)))
