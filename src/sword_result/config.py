"""Configuration: resolve once, freeze, then read through an ambient scope.

Settings are validated by a Pydantic schema and frozen into a
``FrozenConfig``. Resolution precedence is defaults < dotenv file <
``SWORD_RESULT_*`` environment variables < explicit overrides.

The adapters read ``current_config()``; ``config_scope`` swaps it for the
duration of a ``with`` block without touching global state.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from functools import cache
import logging
import os
from typing import TYPE_CHECKING, Any

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sword_result.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping
    from pathlib import Path

__all__ = [
    "ENV_PREFIX",
    "FrozenConfig",
    "Settings",
    "config_scope",
    "current_config",
    "resolve_config",
]

log = logging.getLogger(__name__)

ENV_PREFIX = "SWORD_RESULT_"


class Settings(BaseModel):
    """Pydantic schema: the single source of field names, types and defaults."""

    #: Attach ``__traceback__`` to captured exceptions. Turning it off keeps
    #: Err payloads from pinning stack frames in memory.
    capture_traceback: bool = Field(default=True)
    #: Log every exception captured by the ``try_*`` adapters at DEBUG level.
    log_captured: bool = Field(default=False)

    model_config = ConfigDict(extra="forbid")


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration payload read by the adapters."""

    capture_traceback: bool = True
    log_captured: bool = False


_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "sword_result_ambient_config", default=None
)


def _load_env(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect ``SWORD_RESULT_*`` variables, keyed by lower-cased field name."""
    source = os.environ if environ is None else environ
    known = set(Settings.model_fields)
    found: dict[str, str] = {}
    for key, value in source.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX) :].lower()
        if name in known:
            found[name] = value
        else:
            log.debug("Ignoring unknown setting %s", key)
    return found


def resolve_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    env_file: str | Path | None = None,
) -> FrozenConfig:
    """Resolve configuration from all layers into a ``FrozenConfig``.

    Args:
        overrides: Programmatic values; highest precedence.
        env_file: Optional dotenv file read with ``dotenv_values``. It is
            never loaded into ``os.environ``.

    Raises:
        ConfigurationError: If the merged values fail validation.
    """
    merged: dict[str, Any] = {}
    if env_file is not None:
        file_values = {
            k: v for k, v in dotenv_values(env_file).items() if v is not None
        }
        merged.update(_load_env(file_values))
    merged.update(_load_env())
    merged.update(overrides or {})

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
        raise ConfigurationError(
            f"Configuration validation failed for {field!r}: {first.get('msg')}",
            hint=f"Known settings: {', '.join(sorted(Settings.model_fields))}",
        ) from e

    return FrozenConfig(**settings.model_dump())


@cache
def _default_config() -> FrozenConfig:
    return resolve_config()


def current_config() -> FrozenConfig:
    """Return the ambient config, falling back to the environment default."""
    ambient = _AMBIENT.get()
    if ambient is not None:
        return ambient
    return _default_config()


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: object,
) -> Generator[FrozenConfig]:
    """Run a block with a specific configuration.

    Thread-safe and async-safe: the value lives in a ``ContextVar``.

    Example:
        with config_scope(capture_traceback=False):
            result = try_sync(load_document)
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        if overrides:
            raise ConfigurationError(
                "Cannot combine a FrozenConfig with keyword overrides",
                hint="Pass a mapping of overrides instead.",
            )
        cfg = cfg_or_overrides
    else:
        cfg = resolve_config({**(cfg_or_overrides or {}), **overrides})

    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)
