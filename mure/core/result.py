"""Result type for explicit error handling.

Every fallible operation in mure (running git, resolving a default branch,
reading a symlink in the workspace) returns ``Result[T, E]`` instead of
raising. Callers branch on the two cases with pattern matching:

    match repo.current_branch():
        case Ok(branch):
            console.print(f"on {branch}")
        case Err(error):
            console.error(error.message)

or with ``isinstance(result, Err)`` for an early return.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

__all__ = ["Err", "Ok", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result holding ``value``."""

    value: T

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the contained value."""
        return Ok(f(self.value))

    def flat_map[U, E](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain another fallible step onto this value."""
        return f(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result holding ``error``."""

    error: E

    def unwrap(self) -> None:
        """Raises ValueError carrying the error."""
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or[T](self, default: T) -> T:
        return default

    def map[T, U](self, f: Callable[[T], U]) -> Err[E]:
        return self

    def flat_map[T, U](self, f: Callable[[T], Result[U, E]]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
