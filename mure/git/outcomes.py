"""Outcome classifiers for git command output.

Some git outcomes have no exit code of their own and can only be told apart
by the text git prints. That parsing is fragile (it depends on git's version
and locale), so it is kept here, free of any process handling, and tested on
literal strings. If git changes its phrasing, this is the only module to
update.
"""

from __future__ import annotations

from enum import Enum

from mure.platform.process import RawCommandResult

__all__ = [
    "FastForwardOutcome",
    "classify_pull",
    "split_lines",
    "status_has_changes",
]

_UP_TO_DATE_MARKERS = ("Already up to date.", "Already up-to-date.")
_FAST_FORWARD_MARKER = "Fast-forward"

# Porcelain v1 status letters for new, modified, deleted, renamed, copied,
# type-changed and unmerged entries. "!" (ignored) and " " do not count.
_CHANGE_CODES = frozenset("?AMDRCTU")


class FastForwardOutcome(Enum):
    """What a ``git pull --ff-only`` did."""

    ALREADY_UP_TO_DATE = "already up to date"
    FAST_FORWARDED = "fast-forwarded"
    ABORTED = "aborted"

    def __str__(self) -> str:
        return self.value


def classify_pull(raw: RawCommandResult) -> FastForwardOutcome:
    """Classify the output of ``git pull --ff-only <remote> <branch>``.

    A pull that exited non-zero (diverged history, missing remote branch,
    conflicting local changes) is ``ABORTED``, as is any output that mentions
    neither marker.
    """
    if not raw.succeeded:
        return FastForwardOutcome.ABORTED
    if any(marker in raw.stdout for marker in _UP_TO_DATE_MARKERS):
        return FastForwardOutcome.ALREADY_UP_TO_DATE
    if _FAST_FORWARD_MARKER in raw.stdout:
        return FastForwardOutcome.FAST_FORWARDED
    return FastForwardOutcome.ABORTED


def split_lines(text: str) -> list[str]:
    """Split command output into lines, dropping empty ones."""
    return [line.rstrip("\r") for line in text.split("\n") if line.strip()]


def status_has_changes(porcelain: str) -> bool:
    """True if ``git status --porcelain=v1`` output lists a change.

    Both the index (X) and the working tree (Y) column are checked.
    """
    for line in split_lines(porcelain):
        if len(line) < 2:
            continue
        xy = line[:2]
        if xy[0] in _CHANGE_CODES or xy[1] in _CHANGE_CODES:
            return True
    return False
