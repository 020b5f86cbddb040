"""Workspace store layout and discovery."""

from .discovery import (
    DiscoveryError,
    ManagedRepository,
    list_managed_repositories,
    read_managed_repository,
)

__all__ = [
    "DiscoveryError",
    "ManagedRepository",
    "list_managed_repositories",
    "read_managed_repository",
]
