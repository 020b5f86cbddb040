"""Hosting-provider helpers: repository identity and default-branch lookup."""

from .default_branch import DefaultBranchError, DefaultBranchResolver, GhDefaultBranchResolver
from .repo import RepoIdentity, parse_url

__all__ = [
    "DefaultBranchError",
    "DefaultBranchResolver",
    "GhDefaultBranchResolver",
    "RepoIdentity",
    "parse_url",
]
