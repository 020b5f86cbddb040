"""Refresh command - bring repositories up to date with upstream."""

from __future__ import annotations

from pathlib import Path

import typer

from mure.cli.context import build_context
from mure.core.errors import ErrorCode
from mure.core.result import Err
from mure.core.verbosity import Verbosity
from mure.github.default_branch import GhDefaultBranchResolver
from mure.output.console import RichConsole, Style
from mure.services.refresh import refresh as refresh_repository
from mure.services.refresh_all import RefreshAllService, report_refresh


def refresh(
    repository: Path | None = typer.Argument(
        None, help="Repository path (default: current directory)"
    ),
    all_: bool = typer.Option(False, "--all", "-a", help="Refresh every managed repository"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only report changes"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Include git output"),
) -> None:
    """Fetch, fast-forward and prune merged branches."""
    verbosity = Verbosity.from_flags(quiet=quiet, verbose=verbose)

    if all_:
        ctx = build_context()
        summary = RefreshAllService(
            root=ctx.config.base_path,
            console=ctx.console,
            resolver=GhDefaultBranchResolver(),
            verbosity=verbosity,
        ).run()
        if not summary.ok:
            ctx.console.print(
                f"{summary.failed} of {len(summary.reports)} repositories failed", Style.DIM
            )
            raise typer.Exit(code=int(ErrorCode.GIT_ERROR))
        return

    console = RichConsole()
    path = (repository or Path.cwd()).expanduser().absolute()
    result = refresh_repository(path, resolver=GhDefaultBranchResolver(), verbosity=verbosity)
    report_refresh(console, path.name, result)
    if isinstance(result, Err):
        raise typer.Exit(code=int(ErrorCode.GIT_ERROR))
