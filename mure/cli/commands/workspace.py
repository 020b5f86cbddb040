from __future__ import annotations

import typer

from mure.cli.commands._helpers import exit_on_error
from mure.cli.context import build_context
from mure.core.config import initialize_config, resolve_config_path
from mure.core.errors import ErrorCode
from mure.core.result import Err, Ok
from mure.output.console import RichConsole, Style
from mure.services.workspace import format_listing, resolve_path, shell_shims
from mure.store.discovery import list_managed_repositories


def init() -> None:
    """Create the default config file (~/.mure.toml)."""
    console = RichConsole()
    result = initialize_config()
    exit_on_error(result, console, ErrorCode.USER_ERROR)
    console.success(f"config written: {resolve_config_path()}")


def list_repos(
    path: bool = typer.Option(False, "--path", help="Show paths instead of names"),
    full: bool = typer.Option(False, "--full", help="Show owner/name or absolute paths"),
) -> None:
    """List managed repositories."""
    ctx = build_context()
    entries = list_managed_repositories(ctx.config.base_path)
    if not entries:
        ctx.console.print("No repositories found", Style.DIM)
        return

    for entry in entries:
        match entry:
            case Ok(repo):
                ctx.console.print(format_listing(repo, path=path, full=full))
            case Err(error):
                ctx.console.error(error.message)


def path(name: str = typer.Argument(..., help="Repository name")) -> None:
    """Print the workspace path of a repository."""
    ctx = build_context()
    result = resolve_path(ctx.config, name)
    exit_on_error(result, ctx.console, ErrorCode.USER_ERROR)
    typer.echo(str(result.unwrap()))


def shims() -> None:
    """Print a shell function to cd into a repository."""
    ctx = build_context()
    typer.echo(shell_shims(ctx.config), nl=False)
