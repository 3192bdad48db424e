"""Result type for explicit, value-based error handling.

A ``Result`` is either ``Ok(value)`` or ``Err(error)``. Both variants are
frozen dataclasses, so they compare structurally, pattern-match with
``case Ok(value):`` / ``case Err(error):`` and never change after
construction. Every combinator returns a new instance or the same one.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, NoReturn

from sword_result.errors import UnwrapException

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

__all__ = ["Err", "Ok", "Result", "err", "ok"]


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class Ok[T]:
    """The success variant, holding ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def ok_or_none(self) -> T:
        return self.value

    def err_or_none(self) -> None:
        return None

    def guard(self) -> tuple[T, None]:
        """Return ``(value, None)`` for Go-style destructuring."""
        return (self.value, None)

    def fold[R](self, on_ok: Callable[[T], R], on_err: Callable[[Any], R]) -> R:
        return on_ok(self.value)

    def match[R](self, *, ok: Callable[[T], R], err: Callable[[Any], R]) -> R:
        return self.fold(ok, err)

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:
        return self

    map_error = map_err

    def and_then[U, E](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return f(self.value)

    async def and_then_async[U, E](
        self, f: Callable[[T], Awaitable[Result[U, E]]]
    ) -> Result[U, E]:
        return await f(self.value)

    def or_else(self, f: Callable[[Any], Any]) -> Ok[T]:
        return self

    def unwrap_or(self, fallback: object) -> T:
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], Any]) -> T:
        return self.value

    def unwrap(self, message: str | None = None) -> T:
        return self.value

    def expect(self, message: str) -> T:
        return self.value

    def unwrap_err(self, message: str | None = None) -> NoReturn:
        raise UnwrapException(message or "Tried to unwrap_err Ok", self.value)

    def expect_err(self, message: str) -> NoReturn:
        return self.unwrap_err(message)

    def inspect(self, f: Callable[[T], object]) -> Ok[T]:
        f(self.value)
        return self

    tap = inspect

    def inspect_err(self, f: Callable[[Any], object]) -> Ok[T]:
        return self

    async def tap_async(self, f: Callable[[T], Awaitable[object]]) -> Ok[T]:
        await f(self.value)
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class Err[E]:
    """The failure variant, holding ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def ok_or_none(self) -> None:
        return None

    def err_or_none(self) -> E:
        return self.error

    def guard(self) -> tuple[None, E]:
        """Return ``(None, error)`` for Go-style destructuring."""
        return (None, self.error)

    def fold[R](self, on_ok: Callable[[Any], R], on_err: Callable[[E], R]) -> R:
        return on_err(self.error)

    def match[R](self, *, ok: Callable[[Any], R], err: Callable[[E], R]) -> R:
        return self.fold(ok, err)

    def map(self, f: Callable[[Any], Any]) -> Err[E]:
        # A fresh Err carrying the very same error object.
        return Err(self.error)

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        return Err(f(self.error))

    map_error = map_err

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:
        return Err(self.error)

    async def and_then_async(self, f: Callable[[Any], Any]) -> Err[E]:
        return Err(self.error)

    def or_else[T, F](self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        return f(self.error)

    def unwrap_or[T](self, fallback: T) -> T:
        return fallback

    def unwrap_or_else[T](self, f: Callable[[E], T]) -> T:
        return f(self.error)

    def unwrap(self, message: str | None = None) -> NoReturn:
        raise UnwrapException(message or "Tried to unwrap Err", self.error)

    def expect(self, message: str) -> NoReturn:
        return self.unwrap(message)

    def unwrap_err(self, message: str | None = None) -> E:
        return self.error

    def expect_err(self, message: str) -> E:
        return self.error

    def inspect(self, f: Callable[[Any], object]) -> Err[E]:
        return self

    tap = inspect

    def inspect_err(self, f: Callable[[E], object]) -> Err[E]:
        f(self.error)
        return self

    async def tap_async(self, f: Callable[[Any], Awaitable[object]]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def ok[T](value: T) -> Ok[T]:
    """Construct the success variant."""
    return Ok(value)


def err[E](error: E) -> Err[E]:
    """Construct the failure variant."""
    return Err(error)
