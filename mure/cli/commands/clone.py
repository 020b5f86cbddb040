from __future__ import annotations

import typer

from mure.cli.context import build_context
from mure.core.errors import ErrorCode
from mure.core.result import Err, Ok
from mure.core.verbosity import Verbosity
from mure.output.console import Style
from mure.services.clone import CloneError
from mure.services.clone import clone as clone_repository


def _exit_code(error: CloneError) -> ErrorCode:
    match error.kind:
        case "invalid_url" | "already_exists":
            return ErrorCode.USER_ERROR
        case "io_failed":
            return ErrorCode.IO_ERROR
        case "clone_failed":
            return ErrorCode.GIT_ERROR


def clone(
    url: str = typer.Argument(..., help="Repository URL (https, git@ or ssh://)"),
    quiet: bool = typer.Option(False, "--quiet", "-q"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Clone a repository into the store and link it into the workspace."""
    ctx = build_context()
    result = clone_repository(
        ctx.config, url, verbosity=Verbosity.from_flags(quiet=quiet, verbose=verbose)
    )
    match result:
        case Err(error):
            ctx.console.error(error.message)
            if error.hint:
                ctx.console.print(f"hint: {error.hint}", Style.DIM)
            raise typer.Exit(code=int(_exit_code(error)))
        case Ok(cloned):
            for line in cloned.transcript:
                ctx.console.print(line)
            ctx.console.success(f"{cloned.identity.fully_qualified_name} -> {cloned.link_path}")
