"""Result pattern for storage operations.

Document and lock operations report failures as values instead of raising:
- Ok: success with a value
- Err: failure with a message, an error code from ``core.errors`` and an
  optional path

The store inspects the result, logs the failure and degrades gracefully.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, TypeVar, cast

from mru_frecency.core.errors import ERRORS_BY_CODE, FrecencyError

T = TypeVar("T")
U = TypeVar("U")


class Result(ABC, Generic[T]):
    """Base class for Ok/Err."""

    @abstractmethod
    def is_ok(self) -> bool:
        """Return True if this is an Ok result."""

    @abstractmethod
    def is_err(self) -> bool:
        """Return True if this is an Err result."""

    @abstractmethod
    def unwrap(self) -> T:
        """Return the value from Ok, or raise the matching FrecencyError."""

    @abstractmethod
    def unwrap_or(self, default: T) -> T:
        """Return the value from Ok, or default otherwise."""

    def map(self, func: Callable[[T], U]) -> "Result[U]":
        """Transform the value of an Ok result, pass an Err through unchanged."""
        if self.is_ok():
            return Ok(func(self.unwrap()))
        return cast(Any, self)  # type: ignore[return-value]

    def bind(self, func: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Chain a function that itself returns a Result."""
        if self.is_ok():
            return func(self.unwrap())
        return cast(Any, self)  # type: ignore[return-value]


class Ok(Result[T]):
    """Success result containing a value."""

    def __init__(self, value: T):
        self._value = value

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:
        return self._value

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Ok):
            return False
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(("Ok", repr(self._value)))


class Err(Result[T]):
    """Error result containing error information."""

    def __init__(self, error: str, code: Optional[str] = None, path: Optional[str] = None):
        """Initialize Err.

        Args:
            error: Human readable description of the failure.
            code: Error code, one of the ``code`` values in ``core.errors``.
            path: File the failure relates to, if any.
        """
        self.error = error
        self.code = code
        self.path = path

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        raise self.to_exception()

    def unwrap_or(self, default: T) -> T:
        return default

    def to_exception(self) -> FrecencyError:
        """Build the exception matching this error's code."""
        exc_cls = ERRORS_BY_CODE.get(self.code or "", FrecencyError)
        return exc_cls(self.error, path=self.path)

    def __repr__(self) -> str:
        if self.code:
            return f"Err({self.error!r}, code={self.code!r})"
        return f"Err({self.error!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Err):
            return False
        return self.error == other.error and self.code == other.code and self.path == other.path

    def __hash__(self) -> int:
        return hash(("Err", self.error, self.code, self.path))
