"""
catpy.py: Result type for non-raising pipeline calls.

Provides the tagged union used by ``Pipeline.try_call``:
- Result (Ok/Err) with fmap/bind and the usual unwrap helpers

Prefer raising calls inside library code; Result is for callers that want
to branch on failure without try/except.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class Result(ABC, Generic[T, E]):
    """
    Tagged union for success or failure with an error value.
    - Ok(value)
    - Err(error)

    Laws (for all x and functions f, g returning Result):
      1) Left identity:  Ok(x).bind(f) == f(x)
      2) Right identity: m.bind(Ok)    == m
      3) Associativity:  m.bind(f).bind(g) == m.bind(lambda x: f(x).bind(g))

    ::: This is-in-layer Domain-Specific-Language-Layer.
    ::: This is a monad.
    ::: This is stateless.
    """

    @abstractmethod
    def bind(self, f: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        """Chain a function that returns a Result (aka flatMap)."""
        raise NotImplementedError

    @abstractmethod
    def fmap(self, f: Callable[[T], U]) -> "Result[U, E]":
        """Map a pure function over the success value."""
        raise NotImplementedError

    def is_ok(self) -> bool:
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        return isinstance(self, Err)

    def unwrap(self) -> T:
        """Get the value or raise the stored error if Err."""
        if isinstance(self, Ok):
            return self.value
        error = self.error  # type: ignore[attr-defined]
        if isinstance(error, BaseException):
            raise error
        raise ValueError(f"Cannot unwrap Err: {self}")

    def unwrap_or(self, default: T) -> T:
        """Get the value or return default if Err."""
        if isinstance(self, Ok):
            return self.value
        return default


@dataclass(frozen=True)
class Ok(Result[T, E]):
    """Represents a successful result.

    ::: This is-in-layer Domain-Specific-Language-Layer.
    ::: This is a monad.
    ::: This is stateless.
    """
    value: T

    def bind(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return f(self.value)

    def fmap(self, f: Callable[[T], U]) -> Result[U, E]:
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Result[Any, E]):
    """Represents a failed result with error information.

    ::: This is-in-layer Domain-Specific-Language-Layer.
    ::: This is a monad.
    ::: This is stateless.
    """
    error: E

    def bind(self, f: Callable[[Any], Result[U, E]]) -> Result[U, E]:
        return self  # type: ignore[return-value]

    def fmap(self, f: Callable[[Any], U]) -> Result[U, E]:
        return self  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


__all__ = ["Result", "Ok", "Err"]
