"""Result type for delivering request completions as values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Completed request carrying the decoded document."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def as_pair(self) -> tuple[None, T]:
        """Two-slot ``(error, data)`` form, as handed to callbacks."""
        return None, self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed request carrying the error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def as_pair(self) -> tuple[E, None]:
        return self.error, None


Result = Union[Ok[T], Err[E]]
