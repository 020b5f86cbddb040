"""Tests for services/refresh.py.

Most scenarios run the real git binary against a local upstream; the default
branch comes from a fixed resolver instead of the GitHub CLI.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from mure.core.result import Err, Ok, Result
from mure.core.verbosity import Verbosity
from mure.git.runner import SubprocessGit
from mure.github.default_branch import DefaultBranchError
from mure.platform.process import CouldNotExecute, ExecutionError, RawCommandResult
from mure.services.refresh import (
    RefreshOutcome,
    SkipReason,
    Skipped,
    Updated,
    refresh,
    skip_message,
)

if TYPE_CHECKING:
    from mure.test.conftest import GitSandbox


class FixedResolver:
    def __init__(self, branch: str = "main") -> None:
        self.branch = branch
        self.calls: list[Path] = []

    def default_branch(self, repo_path: Path) -> Result[str, DefaultBranchError]:
        self.calls.append(repo_path)
        return Ok(self.branch)


class FailingResolver:
    def default_branch(self, repo_path: Path) -> Result[str, DefaultBranchError]:
        return Err(DefaultBranchError("gh: not logged in", hint="Run: gh auth login"))


class RecordingGit:
    """Real git, with the option to make one subcommand unrunnable."""

    def __init__(self, unrunnable: str | None = None) -> None:
        self._git = SubprocessGit()
        self._unrunnable = unrunnable
        self.calls: list[tuple[str, ...]] = []

    def execute(
        self, workdir: Path, args: Sequence[str]
    ) -> Result[RawCommandResult, ExecutionError]:
        self.calls.append(tuple(args))
        if args[0] == self._unrunnable:
            return Err(CouldNotExecute(command=("git", *args), reason="killed"))
        return self._git.execute(workdir, args)


def updated(result: Result[RefreshOutcome, object]) -> Updated:
    assert isinstance(result, Ok), result
    assert isinstance(result.value, Updated), result.value
    return result.value


@pytest.fixture
def upstream(git_sandbox: GitSandbox) -> Path:
    return git_sandbox.upstream()


@pytest.fixture
def work(git_sandbox: GitSandbox, upstream: Path) -> Path:
    return git_sandbox.clone(upstream, "work")


class TestSkipMessage:
    def test_messages(self) -> None:
        assert skip_message("mure", SkipReason.NOT_A_GIT_REPOSITORY) == (
            "mure is not a git repository"
        )
        assert skip_message("mure", SkipReason.NO_REMOTE) == "mure has no remote"
        assert skip_message("mure", SkipReason.EMPTY_REPOSITORY) == "mure has no commits yet"


class TestSkips:
    def test_not_a_git_repository(self, tmp_path: Path) -> None:
        resolver = FixedResolver()

        result = refresh(tmp_path, resolver=resolver)

        assert result == Ok(Skipped(SkipReason.NOT_A_GIT_REPOSITORY))
        assert resolver.calls == []

    def test_not_a_git_repository_runs_no_git(self, tmp_path: Path) -> None:
        git = RecordingGit()

        result = refresh(tmp_path, resolver=FixedResolver(), git=git)

        assert result == Ok(Skipped(SkipReason.NOT_A_GIT_REPOSITORY))
        assert git.calls == []

    def test_git_file_counts_as_metadata(self, tmp_path: Path) -> None:
        (tmp_path / ".git").write_text("gitdir: ../missing/.git\n", encoding="utf-8")

        result = refresh(tmp_path, resolver=FixedResolver(), git=RecordingGit())

        assert isinstance(result, Err)
        assert result.error.kind == "open_failed"

    def test_no_remote(self, git_sandbox: GitSandbox) -> None:
        path = git_sandbox.upstream("local-only")
        resolver = FixedResolver()

        result = refresh(path, resolver=resolver)

        assert result == Ok(Skipped(SkipReason.NO_REMOTE))
        assert resolver.calls == []

    def test_empty_repository(self, git_sandbox: GitSandbox, upstream: Path) -> None:
        path = git_sandbox.init("fresh")
        git_sandbox.run(path, "remote", "add", "origin", str(upstream))

        result = refresh(path, resolver=FixedResolver())

        assert result == Ok(Skipped(SkipReason.EMPTY_REPOSITORY))

    def test_empty_without_remote_is_no_remote(self, git_sandbox: GitSandbox) -> None:
        path = git_sandbox.init("fresh")

        result = refresh(path, resolver=FixedResolver())

        assert result == Ok(Skipped(SkipReason.NO_REMOTE))


class TestUpdate:
    def test_already_up_to_date(self, git_sandbox: GitSandbox, work: Path) -> None:
        result = refresh(work, resolver=FixedResolver())

        outcome = updated(result)
        assert outcome.transcript == ("Switched to main", "Already up to date")
        assert outcome.switched_to_default_branch is False

    def test_fast_forward(self, git_sandbox: GitSandbox, upstream: Path, work: Path) -> None:
        git_sandbox.commit(upstream)

        outcome = updated(refresh(work, resolver=FixedResolver()))

        assert outcome.transcript == ("Switched to main", "Fast-forwarded")
        assert git_sandbox.head(work) == git_sandbox.head(upstream)

    def test_switches_back_to_default_and_prunes(
        self, git_sandbox: GitSandbox, upstream: Path, work: Path
    ) -> None:
        git_sandbox.run(work, "switch", "--quiet", "-c", "feature")
        git_sandbox.commit(work)
        git_sandbox.run(upstream, "fetch", "--quiet", str(work), "feature:feature")
        git_sandbox.run(upstream, "merge", "--quiet", "--ff-only", "feature")

        outcome = updated(refresh(work, resolver=FixedResolver()))

        assert outcome.switched_to_default_branch is True
        assert outcome.transcript == (
            "Switched to main",
            "Fast-forwarded",
            "Deleted branch feature",
        )
        assert git_sandbox.current_branch(work) == "main"
        assert git_sandbox.branches(work) == ["main"]

    def test_keeps_unmerged_branches(self, git_sandbox: GitSandbox, work: Path) -> None:
        git_sandbox.run(work, "switch", "--quiet", "-c", "wip")
        git_sandbox.commit(work)
        git_sandbox.run(work, "switch", "--quiet", "main")

        outcome = updated(refresh(work, resolver=FixedResolver()))

        assert "Deleted branch wip" not in outcome.transcript
        assert git_sandbox.branches(work) == ["main", "wip"]

    def test_dirty_tree_stays_on_branch(self, git_sandbox: GitSandbox, work: Path) -> None:
        git_sandbox.run(work, "switch", "--quiet", "-c", "wip")
        git_sandbox.commit(work)
        (work / "notes.txt").write_text("unsaved", encoding="utf-8")

        outcome = updated(refresh(work, resolver=FixedResolver()))

        assert outcome.switched_to_default_branch is False
        assert not any(line.startswith("Switched to") for line in outcome.transcript)
        assert git_sandbox.current_branch(work) == "wip"
        assert (work / "notes.txt").read_text(encoding="utf-8") == "unsaved"
        assert git_sandbox.branches(work) == ["main", "wip"]

    def test_dirty_tree_still_prunes_merged_branches(
        self, git_sandbox: GitSandbox, work: Path
    ) -> None:
        git_sandbox.run(work, "branch", "feature")
        (work / "notes.txt").write_text("unsaved", encoding="utf-8")

        outcome = updated(refresh(work, resolver=FixedResolver()))

        assert outcome.transcript == ("Already up to date", "Deleted branch feature")
        assert git_sandbox.branches(work) == ["main"]

    def test_diverged_history_is_left_alone(
        self, git_sandbox: GitSandbox, upstream: Path, work: Path
    ) -> None:
        git_sandbox.commit(upstream)
        local_head = git_sandbox.commit(work)

        outcome = updated(refresh(work, resolver=FixedResolver()))

        assert outcome.transcript == ("Switched to main",)
        assert git_sandbox.head(work) == local_head

    def test_other_default_branch(
        self, git_sandbox: GitSandbox, upstream: Path, work: Path
    ) -> None:
        git_sandbox.run(upstream, "branch", "develop")
        git_sandbox.run(work, "branch", "done")

        outcome = updated(refresh(work, resolver=FixedResolver("develop")))

        assert outcome.switched_to_default_branch is True
        assert git_sandbox.current_branch(work) == "develop"
        assert "Deleted branch done" in outcome.transcript
        assert "Deleted branch main" in outcome.transcript
        assert git_sandbox.branches(work) == ["develop"]


class TestVerbosity:
    def test_quiet_omits_pull_status(
        self, git_sandbox: GitSandbox, upstream: Path, work: Path
    ) -> None:
        git_sandbox.commit(upstream)

        outcome = updated(refresh(work, resolver=FixedResolver(), verbosity=Verbosity.QUIET))

        assert outcome.transcript == ("Switched to main",)

    def test_verbose_includes_git_output(
        self, git_sandbox: GitSandbox, upstream: Path, work: Path
    ) -> None:
        git_sandbox.commit(upstream)

        outcome = updated(refresh(work, resolver=FixedResolver(), verbosity=Verbosity.VERBOSE))

        assert outcome.transcript[:2] == ("Switched to main", "Fast-forwarded")
        assert len(outcome.transcript) > 2
        assert "Updating" in outcome.message


class TestFailures:
    def test_default_branch_unavailable(self, work: Path) -> None:
        result = refresh(work, resolver=FailingResolver())

        assert isinstance(result, Err)
        assert result.error.kind == "default_branch_unavailable"
        assert result.error.message == "gh: not logged in"
        assert result.error.hint == "Run: gh auth login"

    def test_fetch_failed(self, git_sandbox: GitSandbox, upstream: Path, work: Path) -> None:
        shutil.rmtree(upstream)

        result = refresh(work, resolver=FixedResolver())

        assert isinstance(result, Err)
        assert result.error.kind == "fetch_failed"

    def test_unknown_default_branch(self, work: Path) -> None:
        result = refresh(work, resolver=FixedResolver("no-such-branch"))

        assert isinstance(result, Err)
        assert result.error.kind == "switch_failed"

    def test_git_missing(self, work: Path) -> None:
        class NoGit:
            def execute(
                self, workdir: Path, args: Sequence[str]
            ) -> Result[RawCommandResult, ExecutionError]:
                return Err(CouldNotExecute(command=("git", *args), reason="not found"))

        result = refresh(work, resolver=FixedResolver(), git=NoGit())

        assert isinstance(result, Err)
        assert result.error.kind == "open_failed"
        assert result.error.message == "Failed to execute git: not found"

    def test_pull_that_cannot_run(self, work: Path) -> None:
        git = RecordingGit(unrunnable="pull")

        result = refresh(work, resolver=FixedResolver(), git=git)

        assert isinstance(result, Err)
        assert result.error.kind == "pull_failed"
        assert result.error.message == "Failed to execute git: killed"
        assert not any(call[0] == "for-each-ref" for call in git.calls)

    def test_merged_branch_that_cannot_be_deleted(
        self, git_sandbox: GitSandbox, work: Path
    ) -> None:
        git_sandbox.run(work, "branch", "feature")
        second_tree = git_sandbox.root / "second-tree"
        git_sandbox.run(work, "worktree", "add", "--quiet", str(second_tree), "feature")

        result = refresh(work, resolver=FixedResolver())

        assert isinstance(result, Err)
        assert result.error.kind == "delete_failed"
        assert "feature" in git_sandbox.branches(work)


class TestCheckedOutBranch:
    def test_dirty_checked_out_merged_branch_survives(
        self, git_sandbox: GitSandbox, work: Path
    ) -> None:
        git_sandbox.run(work, "switch", "--quiet", "-c", "feature")
        (work / "notes.txt").write_text("unsaved", encoding="utf-8")

        outcome = updated(refresh(work, resolver=FixedResolver()))

        assert outcome.switched_to_default_branch is False
        assert outcome.transcript == ("Already up to date",)
        assert git_sandbox.current_branch(work) == "feature"
        assert git_sandbox.branches(work) == ["feature", "main"]
