"""Scoped early-return runner: do-notation for ``Result``.

``run`` hands the caller's function a ``bind`` helper. ``bind(Ok(v))``
returns ``v``; ``bind(Err(e))`` abandons the rest of the function and makes
``run`` return ``Err(e)``:

    def load_user(user_id: str) -> Result[User, str]:
        def steps(bind: Bind[str]) -> Result[User, str]:
            raw = bind(fetch(user_id))
            record = bind(parse(raw))
            return Ok(User(**record))

        return run(steps)

The abort is a private ``BaseException`` subclass tagged with the scope that
raised it. Each ``run``/``run_async`` call opens its own scope, catches only
signals carrying that scope and closes it on exit, so signals never cross
nested runs and never escape a finished one. Sync and async entry points
share the scope; they differ only in whether the outcome is called or
awaited.

If ``fn`` swallows the signal, the first bound error still wins and a warning
is logged. That covers ``except BaseException`` blocks and also
``asyncio.gather(..., return_exceptions=True)``, which hands the signal
back to ``fn`` as an ordinary list element and lets ``fn`` keep running.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from sword_result.errors import ScopeError
from sword_result.result import Err, Ok

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType

    from sword_result.result import Result

__all__ = ["Bind", "run", "run_async"]

log = logging.getLogger(__name__)


class Bind[E](Protocol):
    """The helper passed to a runner's function."""

    def __call__[U](self, result: Result[U, E], /) -> U: ...


class _EarlyReturn(BaseException):
    """Unwinds one runner scope. Never caught outside its own scope."""

    __slots__ = ("error", "scope")

    def __init__(self, scope: _Scope, error: Any) -> None:
        super().__init__()
        self.scope = scope
        self.error = error


class _Scope:
    """Catch boundary and bookkeeping for a single runner invocation."""

    __slots__ = ("_active", "_failed", "_first_error")

    def __init__(self) -> None:
        self._active = True
        self._failed = False
        self._first_error: Any = None

    def bind(self, result: Any, /) -> Any:
        if not self._active:
            raise ScopeError(
                "bind() called after its run() returned",
                hint="Use bind only inside the function passed to run()/run_async().",
            )
        if isinstance(result, Ok):
            return result.value
        if isinstance(result, Err):
            if not self._failed:
                self._failed = True
                self._first_error = result.error
            log.debug("Short-circuiting run scope on %r", result)
            raise _EarlyReturn(self, result.error)
        raise ScopeError(
            f"bind() expects Ok or Err, got {type(result).__name__}",
            hint="Wrap plain values with ok() or use try_sync() for raising code.",
        )

    def __enter__(self) -> _Scope:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self._active = False
        # Suppress only our own signal; foreign signals keep unwinding.
        return isinstance(exc, _EarlyReturn) and exc.scope is self

    @property
    def failed(self) -> bool:
        return self._failed

    def settle[T, E](self, outcome: Result[T, E] | None) -> Result[T, E]:
        if self._failed:
            if outcome is not None:
                log.warning(
                    "Run function swallowed an early return and returned %r; "
                    "returning the first bound error instead",
                    outcome,
                )
            return Err(self._first_error)
        if not isinstance(outcome, (Ok, Err)):
            raise ScopeError(
                f"run() function must return Ok or Err, got {type(outcome).__name__}"
            )
        return outcome


def run[T, E](fn: Callable[[Bind[E]], Result[T, E]]) -> Result[T, E]:
    """Run ``fn(bind)`` and stop at the first ``Err`` handed to ``bind``.

    ``fn`` is called exactly once. Exceptions it raises (other than the
    scope's own signal) propagate unchanged; ``run`` never turns them into
    ``Err``.

    Returns:
        ``fn``'s own Result, or ``Err`` with the first error ``bind`` saw.

    Raises:
        ScopeError: If ``fn`` returns something other than ``Ok``/``Err``.
    """
    outcome: Result[T, E] | None = None
    with _Scope() as scope:
        outcome = fn(scope.bind)
    log.debug("run() finished, short-circuited=%s", scope.failed)
    return scope.settle(outcome)


async def run_async[T, E](
    fn: Callable[[Bind[E]], Awaitable[Result[T, E]]],
) -> Result[T, E]:
    """Async ``run``: ``fn`` is awaited and may await between binds.

    Each ``bind`` decides synchronously when it is called, so steps run in
    exactly the order ``fn`` issues them.
    """
    outcome: Result[T, E] | None = None
    with _Scope() as scope:
        outcome = await fn(scope.bind)
    log.debug("run_async() finished, short-circuited=%s", scope.failed)
    return scope.settle(outcome)
