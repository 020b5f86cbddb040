from __future__ import annotations

from dataclasses import dataclass

import typer

from mure.core.config import Config, load_config
from mure.core.errors import ErrorCode
from mure.core.result import Err
from mure.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context() -> CLIContext:
    console = RichConsole()
    config_result = load_config()
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        if config_result.error.hint:
            console.print(f"hint: {config_result.error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(config=config_result.value, console=console)
