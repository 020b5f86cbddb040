"""Repository identity: host, owner and name.

An identity is what a clone URL and a store path have in common:

    https://github.com/owner/name.git  ->  <base>/repo/github.com/owner/name
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

__all__ = ["RepoIdentity", "parse_url"]

_HTTPS_URL = re.compile(
    r"^https?://(?P<host>[^/@:]+)/(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$"
)
_SCP_URL = re.compile(r"^git@(?P<host>[^/:]+):(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?$")
_SSH_URL = re.compile(
    r"^ssh://git@(?P<host>[^/:]+)(?::22)?/(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?$"
)


@dataclass(frozen=True, slots=True)
class RepoIdentity:
    host: str
    owner: str
    name: str

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.host}/{self.owner}/{self.name}"

    @property
    def name_with_owner(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_store_path(cls, path: Path) -> RepoIdentity:
        """Decompose ``.../<host>/<owner>/<name>`` (the last three segments)."""
        return cls(host=path.parent.parent.name, owner=path.parent.name, name=path.name)


def parse_url(url: str) -> RepoIdentity | None:
    """Parse an https, scp-style or ssh clone URL. None if unrecognised."""
    for pattern in (_HTTPS_URL, _SCP_URL, _SSH_URL):
        match = pattern.match(url.strip())
        if match:
            return RepoIdentity(
                host=match.group("host"),
                owner=match.group("owner"),
                name=match.group("name"),
            )
    return None
