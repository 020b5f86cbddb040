"""Refresh every managed repository in the workspace.

Repositories are refreshed one at a time, in discovery order. A repository
that cannot be discovered or refreshed is reported and the loop moves on;
failures never escape ``RefreshAllService.run``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mure.core.result import Err, Ok, Result
from mure.core.verbosity import Verbosity
from mure.git.runner import GitRunner
from mure.github.default_branch import DefaultBranchResolver
from mure.output.console import ConsoleProtocol, Style
from mure.services.refresh import (
    RefreshError,
    RefreshOutcome,
    Skipped,
    Updated,
    refresh,
    skip_message,
)
from mure.store.discovery import DiscoveryError, list_managed_repositories

__all__ = [
    "RefreshAllService",
    "RefreshReport",
    "RefreshSummary",
    "report_refresh",
]


@dataclass(frozen=True, slots=True)
class RefreshReport:
    """What happened to one workspace entry.

    Exactly one of ``outcome`` and ``error`` is set.
    """

    name: str
    path: Path | None = None
    outcome: RefreshOutcome | None = None
    error: RefreshError | DiscoveryError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def skipped(self) -> bool:
        return isinstance(self.outcome, Skipped)

    @property
    def updated(self) -> bool:
        return isinstance(self.outcome, Updated)


@dataclass(frozen=True, slots=True)
class RefreshSummary:
    reports: tuple[RefreshReport, ...] = ()

    @property
    def updated(self) -> int:
        return sum(1 for r in self.reports if r.updated)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.reports if r.skipped)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.reports if not r.ok)

    @property
    def ok(self) -> bool:
        return self.failed == 0


def report_refresh(
    console: ConsoleProtocol,
    name: str,
    result: Result[RefreshOutcome, RefreshError],
) -> None:
    """Print the outcome of one refresh."""
    match result:
        case Ok(Skipped(reason=reason)):
            console.print(skip_message(name, reason), Style.DIM)
        case Ok(Updated(transcript=transcript)):
            for line in transcript:
                console.print(line)
        case Err(error):
            console.error(f"{name}: {error.message}")
            if error.hint:
                console.print(f"hint: {error.hint}", Style.DIM)


class RefreshAllService:
    """Drive ``refresh`` over every repository linked into the workspace."""

    def __init__(
        self,
        *,
        root: Path,
        console: ConsoleProtocol,
        resolver: DefaultBranchResolver,
        verbosity: Verbosity = Verbosity.NORMAL,
        git: GitRunner | None = None,
    ) -> None:
        self._root = root
        self._console = console
        self._resolver = resolver
        self._verbosity = verbosity
        self._git = git

    def run(self) -> RefreshSummary:
        entries = list_managed_repositories(self._root)
        if not entries:
            self._console.print("No repositories found", Style.DIM)
            return RefreshSummary()

        reports: list[RefreshReport] = []
        for entry in entries:
            match entry:
                case Err(error):
                    self._console.error(error.message)
                    name = error.path.name if error.path else str(self._root)
                    reports.append(RefreshReport(name=name, path=error.path, error=error))
                case Ok(managed):
                    self._console.print(f"> Refreshing {managed.name}", Style.BOLD)
                    result = self._refresh_one(managed.absolute_path)
                    report_refresh(self._console, managed.name, result)
                    match result:
                        case Ok(outcome):
                            reports.append(
                                RefreshReport(
                                    name=managed.name,
                                    path=managed.absolute_path,
                                    outcome=outcome,
                                )
                            )
                        case Err(error):
                            reports.append(
                                RefreshReport(
                                    name=managed.name,
                                    path=managed.absolute_path,
                                    error=error,
                                )
                            )

        return RefreshSummary(reports=tuple(reports))

    def _refresh_one(self, path: Path) -> Result[RefreshOutcome, RefreshError]:
        try:
            return refresh(path, resolver=self._resolver, verbosity=self._verbosity, git=self._git)
        except Exception as e:  # noqa: BLE001
            return Err(RefreshError(kind="unexpected", message=f"unexpected error: {e}"))
