"""Workspace path helpers behind ``mure path``, ``mure list`` and the cd shim."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mure.core.config import Config
from mure.core.result import Err, Ok, Result
from mure.store.discovery import ManagedRepository

__all__ = ["PathError", "format_listing", "resolve_path", "shell_shims"]


@dataclass(frozen=True, slots=True)
class PathError:
    message: str


def resolve_path(config: Config, name: str) -> Result[Path, PathError]:
    """Workspace path of the repository called ``name``."""
    path = config.base_path / name
    if path.is_dir():
        return Ok(path)
    return Err(PathError(f"{path} is not a git repository"))


def shell_shims(config: Config, bin_name: str = "mure") -> str:
    """A shell function that cds into ``mure path <name>``."""
    fn_name = config.shell.cd_shims
    return f'function {fn_name}() {{ local p=$({bin_name} path "$1") && cd "$p" }}\n'


def format_listing(repo: ManagedRepository, *, path: bool, full: bool) -> str:
    if full and path:
        return str(repo.absolute_path)
    if full:
        return repo.identity.name_with_owner
    if path:
        return str(repo.relative_path)
    return repo.identity.name
