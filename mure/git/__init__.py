"""Git operations module.

This module provides abstractions for git operations:
- GitRunner / SubprocessGit: how a git command gets executed
- Repository: named, interpreted operations on one working tree
- FastForwardOutcome and the other output classifiers

Usage:
    from mure.git import Repository

    repo = Repository(Path("/path/to/repo"))
    match repo.has_remote():
        case Ok(True):
            repo.fetch_prune()
        case Ok(False):
            print("no remote")
        case Err(e):
            print(e.message)
"""

from mure.git.outcomes import (
    FastForwardOutcome,
    classify_pull,
    split_lines,
    status_has_changes,
)
from mure.git.repository import GitError, Repository
from mure.git.runner import GitRunner, SubprocessGit

__all__ = [
    # Outcomes
    "FastForwardOutcome",
    "classify_pull",
    "split_lines",
    "status_has_changes",
    # Repository
    "GitError",
    "Repository",
    # Runner
    "GitRunner",
    "SubprocessGit",
]
