"""Result type for operations whose failure has a defined fallback.

Usage:
    result = repository.load()
    if result.is_ok():
        document = result.unwrap()
    else:
        logger.warning("Falling back: %s", result.unwrap_err())
        document = seed_document()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, final

T = TypeVar("T")
E = TypeVar("E", bound=Exception)
_T = TypeVar("_T")


class UnwrapError(Exception):
    """Raised when unwrap() is called on an Err or unwrap_err() on an Ok."""


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result containing a value."""

    _value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_err(self) -> Exception:
        raise UnwrapError("Called unwrap_err on Ok value")


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result containing an error."""

    _error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> _T:  # pyright: ignore[reportInvalidTypeVarUse]
        raise UnwrapError(f"Called unwrap on Err value: {self._error}")

    def unwrap_err(self) -> E:
        return self._error


Result = Ok[T] | Err[E]
