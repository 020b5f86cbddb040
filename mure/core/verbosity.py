"""Output verbosity shared by refresh and clone."""

from __future__ import annotations

from enum import Enum, auto

__all__ = ["Verbosity"]


class Verbosity(Enum):
    """How much raw git output ends up in a transcript.

    Verbosity never changes what a command does, only what it reports.
    """

    QUIET = auto()
    NORMAL = auto()
    VERBOSE = auto()

    @classmethod
    def from_flags(cls, *, quiet: bool, verbose: bool) -> Verbosity:
        """Map CLI flags to a level. ``--quiet`` wins over ``--verbose``."""
        if quiet:
            return cls.QUIET
        if verbose:
            return cls.VERBOSE
        return cls.NORMAL

    def __str__(self) -> str:
        return self.name.lower()
