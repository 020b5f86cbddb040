from __future__ import annotations

import typer

from mure import __version__
from mure.cli.commands.clone import clone
from mure.cli.commands.refresh import refresh
from mure.cli.commands.workspace import init, list_repos, path, shims


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(init)
app.command()(clone)
app.command()(refresh)
app.command("list")(list_repos)
app.command()(path)
app.command("shell-shims")(shims)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Keep a workspace of git repositories in sync with their upstreams."""


def main() -> None:
    app()
