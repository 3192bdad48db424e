"""Adapters between exception-raising code and ``Result`` values.

Only ``try_*`` adapters (and the ``safe`` decorators built on them) catch
exceptions. They catch ``Exception`` subclasses only; ``BaseException``-only
types such as ``KeyboardInterrupt``, ``asyncio.CancelledError`` and the
runner's early-return signal pass straight through.
"""

from __future__ import annotations

from functools import wraps
import logging
from typing import TYPE_CHECKING, Any, overload

from sword_result.config import current_config
from sword_result.errors import UnhandledException
from sword_result.result import Err, Ok

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType

    from sword_result.config import FrozenConfig
    from sword_result.result import Result

__all__ = [
    "from_nullable",
    "from_predicate",
    "safe",
    "safe_async",
    "try_async",
    "try_async_catch",
    "try_catch",
    "try_sync",
    "try_sync_catch",
]

log = logging.getLogger(__name__)


def _captured(
    cfg: FrozenConfig, exc: Exception
) -> tuple[Exception, TracebackType | None]:
    if cfg.log_captured:
        log.debug("Captured %s", type(exc).__name__, exc_info=exc)
    return exc, (exc.__traceback__ if cfg.capture_traceback else None)


def _unhandled(exc: Exception, tb: TracebackType | None) -> UnhandledException:
    return UnhandledException(exc, tb)


def try_catch[T, E](
    body: Callable[[], T],
    on_error: Callable[[Exception, TracebackType | None], E],
) -> Result[T, E]:
    """Call ``body`` and map any raised exception through ``on_error``.

    Example:
        try_catch(lambda: int("abc"), lambda exc, tb: "parse_failed")
        # Err('parse_failed')

    Raises:
        ConfigurationError: If the active configuration cannot be resolved.
            Checked before ``body`` runs, so success and failure paths agree.
    """
    cfg = current_config()
    try:
        value = body()
    except Exception as exc:
        return Err(on_error(*_captured(cfg, exc)))
    return Ok(value)


def try_sync_catch[T, E](
    body: Callable[[], T],
    on_error: Callable[[Exception, TracebackType | None], E],
) -> Result[T, E]:
    """Alias of ``try_catch``, named to pair with ``try_async_catch``."""
    return try_catch(body, on_error)


def try_sync[T](body: Callable[[], T]) -> Result[T, UnhandledException]:
    """Call ``body``; a raised exception becomes ``Err(UnhandledException)``."""
    return try_catch(body, _unhandled)


async def try_async_catch[T, E](
    body: Callable[[], Awaitable[T]],
    on_error: Callable[[Exception, TracebackType | None], E],
) -> Result[T, E]:
    """Await ``body()`` and map any raised exception through ``on_error``.

    Exceptions raised after a suspension point are captured as well.
    Cancellation is not: ``asyncio.CancelledError`` propagates.
    """
    cfg = current_config()
    try:
        value = await body()
    except Exception as exc:
        return Err(on_error(*_captured(cfg, exc)))
    return Ok(value)


async def try_async[T](
    body: Callable[[], Awaitable[T]],
) -> Result[T, UnhandledException]:
    """Async ``try_sync``."""
    return await try_async_catch(body, _unhandled)


def from_nullable[T, E](value: T | None, error: E) -> Result[T, E]:
    """``Err(error)`` when ``value`` is ``None``, else ``Ok(value)``."""
    if value is None:
        return Err(error)
    return Ok(value)


def from_predicate[T, E](
    value: T,
    predicate: Callable[[T], bool],
    error_fn: Callable[[T], E],
) -> Result[T, E]:
    """``Ok(value)`` when ``predicate(value)`` holds, else ``Err(error_fn(value))``."""
    if predicate(value):
        return Ok(value)
    return Err(error_fn(value))


@overload
def safe[**P, T](
    fn: Callable[P, T], /
) -> Callable[P, Result[T, UnhandledException]]: ...


@overload
def safe[**P, T](
    *, on_error: Callable[[Exception, TracebackType | None], Any]
) -> Callable[[Callable[P, T]], Callable[P, Result[T, Any]]]: ...


def safe(fn: Any = None, /, *, on_error: Any = None) -> Any:
    """Decorate a function so its calls return a ``Result``.

    Usable bare (``@safe``) or with a mapper (``@safe(on_error=...)``).

    Example:
        @safe
        def parse_port(raw: str) -> int:
            return int(raw)

        parse_port("80")    # Ok(80)
        parse_port("http")  # Err(UnhandledException(ValueError(...)))
    """
    mapper = on_error or _unhandled

    def decorate(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return try_catch(lambda: func(*args, **kwargs), mapper)

        return wrapper

    return decorate(fn) if fn is not None else decorate


@overload
def safe_async[**P, T](
    fn: Callable[P, Awaitable[T]], /
) -> Callable[P, Awaitable[Result[T, UnhandledException]]]: ...


@overload
def safe_async[**P, T](
    *, on_error: Callable[[Exception, TracebackType | None], Any]
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[Result[T, Any]]]]: ...


def safe_async(fn: Any = None, /, *, on_error: Any = None) -> Any:
    """Async ``safe``: the decorated coroutine function resolves to a ``Result``."""
    mapper = on_error or _unhandled

    def decorate(func: Callable[..., Awaitable[Any]]) -> Callable[..., Any]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            return await try_async_catch(lambda: func(*args, **kwargs), mapper)

        return wrapper

    return decorate(fn) if fn is not None else decorate
