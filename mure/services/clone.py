"""Clone a repository into the store and link it into the workspace."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from mure.core.config import Config
from mure.core.result import Err, Ok, Result
from mure.core.verbosity import Verbosity
from mure.git.repository import Repository
from mure.git.runner import GitRunner
from mure.github.repo import RepoIdentity, parse_url

__all__ = ["CloneError", "CloneResult", "clone"]


@dataclass(frozen=True, slots=True)
class CloneError:
    kind: Literal["invalid_url", "already_exists", "clone_failed", "io_failed"]
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class CloneResult:
    identity: RepoIdentity
    store_path: Path
    link_path: Path
    transcript: tuple[str, ...] = ()


def clone(
    config: Config,
    url: str,
    *,
    verbosity: Verbosity = Verbosity.NORMAL,
    git: GitRunner | None = None,
) -> Result[CloneResult, CloneError]:
    """Clone ``url`` to ``<base>/repo/<host>/<owner>/<name>``, link ``<base>/<name>``."""
    identity = parse_url(url)
    if identity is None:
        return Err(
            CloneError(
                kind="invalid_url",
                message="invalid repo url",
                hint="Expected https://host/owner/name, git@host:owner/name or ssh://...",
            )
        )

    store_path = config.repo_store_path(identity.host, identity.owner, identity.name)
    link_path = config.repo_work_path(identity.name)

    if link_path.exists() or link_path.is_symlink():
        return Err(
            CloneError(
                kind="already_exists",
                message=f"{link_path} already exists",
            )
        )
    if store_path.exists():
        return Err(CloneError(kind="already_exists", message=f"{store_path} already exists"))

    try:
        store_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(CloneError(kind="io_failed", message=f"Could not create {store_path.parent}: {e}"))

    cloned = Repository.clone(url, store_path.parent, git)
    if isinstance(cloned, Err):
        return Err(CloneError(kind="clone_failed", message=cloned.error.message))

    raw = cloned.value.raw
    transcript: list[str] = []
    if verbosity is not Verbosity.QUIET and raw.stderr.strip():
        transcript.append(raw.stderr.rstrip("\n"))
    if verbosity is Verbosity.VERBOSE and raw.stdout.strip():
        transcript.append(raw.stdout.rstrip("\n"))

    try:
        os.symlink(store_path, link_path, target_is_directory=True)
    except OSError as e:
        return Err(
            CloneError(
                kind="io_failed",
                message=f"failed to create symlink {link_path}: {e}",
            )
        )

    return Ok(
        CloneResult(
            identity=identity,
            store_path=store_path,
            link_path=link_path,
            transcript=tuple(transcript),
        )
    )
