"""sword-result: explicit, value-based error handling.

Public API:
    - Ok / Err / Result: the two-variant container and its combinators
    - ok() / err(): constructors
    - try_sync() / try_async() / try_catch(): exception adapters
    - run() / run_async(): scoped early return via ``bind``
    - config_scope(): ambient configuration for the adapters
"""

from __future__ import annotations

import logging

from sword_result.adapters import (
    from_nullable,
    from_predicate,
    safe,
    safe_async,
    try_async,
    try_async_catch,
    try_catch,
    try_sync,
    try_sync_catch,
)
from sword_result.config import (
    FrozenConfig,
    Settings,
    config_scope,
    current_config,
    resolve_config,
)
from sword_result.errors import (
    ConfigurationError,
    ScopeError,
    SwordResultError,
    UnhandledException,
    UnwrapException,
)
from sword_result.result import Err, Ok, Result, err, ok
from sword_result.runner import Bind, run, run_async

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("sword-result")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("sword_result").addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Core type
    "Ok",
    "Err",
    "Result",
    "ok",
    "err",
    # Adapters
    "try_sync",
    "try_async",
    "try_catch",
    "try_sync_catch",
    "try_async_catch",
    "from_nullable",
    "from_predicate",
    "safe",
    "safe_async",
    # Runner
    "Bind",
    "run",
    "run_async",
    # Errors
    "SwordResultError",
    "UnwrapException",
    "ScopeError",
    "ConfigurationError",
    "UnhandledException",
    # Configuration
    "Settings",
    "FrozenConfig",
    "resolve_config",
    "config_scope",
    "current_config",
]
