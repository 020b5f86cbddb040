"""Managed repository discovery.

A managed repository is a symlink directly inside the workspace root that
points into the store:

    <root>/mure  ->  <root>/repo/github.com/kitsuyui/mure

Discovery enumerates those symlinks and turns each into a
``ManagedRepository``. Each entry succeeds or fails on its own, so one
broken link never hides the others.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mure.core.config import STORE_DIR_NAME
from mure.core.result import Err, Ok, Result
from mure.github.repo import RepoIdentity

__all__ = [
    "DiscoveryError",
    "ManagedRepository",
    "list_managed_repositories",
    "read_managed_repository",
]


@dataclass(frozen=True, slots=True)
class DiscoveryError:
    """A workspace entry that could not be read as a managed repository."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ManagedRepository:
    """A symlinked repository in the workspace.

    Attributes:
        relative_path: Link path relative to the workspace root
        absolute_path: Resolved location inside the store
        identity: host/owner/name decomposed from ``absolute_path``
    """

    relative_path: Path
    absolute_path: Path
    identity: RepoIdentity

    @property
    def name(self) -> str:
        return self.identity.name


def read_managed_repository(link: Path, root: Path) -> Result[ManagedRepository, DiscoveryError]:
    """Resolve one workspace symlink into a ``ManagedRepository``."""
    if not link.is_symlink():
        return Err(DiscoveryError(f"{link.name} is not a symlink", path=link))

    try:
        absolute_path = link.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        return Err(DiscoveryError(f"failed to resolve {link.name}: {e}", path=link))

    store = (root / STORE_DIR_NAME).resolve()
    try:
        parts = absolute_path.relative_to(store).parts
    except ValueError:
        parts = ()
    if len(parts) != 3:
        return Err(
            DiscoveryError(
                f"{link.name} does not point to <store>/<host>/<owner>/<name>: {absolute_path}",
                path=link,
            )
        )

    try:
        relative_path = link.relative_to(root)
    except ValueError:
        relative_path = Path(link.name)

    return Ok(
        ManagedRepository(
            relative_path=relative_path,
            absolute_path=absolute_path,
            identity=RepoIdentity.from_store_path(absolute_path),
        )
    )


def list_managed_repositories(
    root: Path,
) -> list[Result[ManagedRepository, DiscoveryError]]:
    """Enumerate symlinks directly under ``root``, sorted by name.

    Plain files and directories (including the store itself) are not
    managed repositories and are skipped. A root that cannot be read yields
    a single error entry.
    """
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name.lower())
    except OSError as e:
        return [Err(DiscoveryError(f"failed to read {root}: {e}", path=root))]

    return [read_managed_repository(entry, root) for entry in entries if entry.is_symlink()]
