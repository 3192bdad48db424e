"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: it exists so suites can assert which
callbacks ran, and with what, without one-off closures in every test.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Recorder:
    """Callable double that records its arguments and returns a fixed value."""

    returns: Any = None
    calls: list[Any] = field(default_factory=list)

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args[0] if len(args) == 1 else args)
        return self.returns

    @property
    def called(self) -> bool:
        return bool(self.calls)


@dataclass
class AsyncRecorder(Recorder):
    """Async Recorder; yields to the event loop once before returning."""

    async def __call__(self, *args: Any) -> Any:  # type: ignore[override]
        await asyncio.sleep(0)
        return super().__call__(*args)
