"""Exception hierarchy for sword-result."""

from __future__ import annotations

from dataclasses import dataclass
import traceback as _traceback
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType


class SwordResultError(Exception):
    """Base exception for all sword-result errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class UnwrapException(SwordResultError):
    """A strict accessor was used on the wrong variant.

    ``payload`` holds the opposing variant's payload: the error when
    ``unwrap()`` hits an ``Err``, the value when ``unwrap_err()`` hits an
    ``Ok``.
    """

    def __init__(
        self, message: str, payload: Any = None, *, hint: str | None = None
    ) -> None:
        self.message = message
        self.payload = payload
        text = message if payload is None else f"{message} ({payload!r})"
        super().__init__(text, hint=hint)


class ScopeError(SwordResultError):
    """An early-return runner was used outside its contract."""


class ConfigurationError(SwordResultError):
    """Configuration validation or resolution failed."""


@dataclass(frozen=True, repr=False)
class UnhandledException:
    """An exception captured by ``try_sync``/``try_async``.

    This is a failure payload, not a raisable exception. ``traceback`` is
    ``None`` when traceback capture is disabled in the active config.
    """

    exception: BaseException
    traceback: TracebackType | None = None

    def format(self) -> str:
        """Render the captured exception the way the interpreter would."""
        return "".join(
            _traceback.format_exception(
                type(self.exception), self.exception, self.traceback
            )
        )

    def causes(self) -> list[BaseException]:
        """Return the exception followed by its cause/context chain."""
        return list(_walk_exception_chain(self.exception))

    def __repr__(self) -> str:
        return f"UnhandledException({self.exception!r})"

    def __str__(self) -> str:
        return f"UnhandledException: {self.exception!r}"


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        # Pushed in reverse so __cause__ is visited before __context__.
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)
        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
