"""Pytest configuration and fixtures.

Provides environment isolation and logging configuration. All fixtures
here are autouse unless noted.
"""

from __future__ import annotations

import logging
import os

import pytest

from sword_result.config import ENV_PREFIX, _default_config

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_config_env(request, monkeypatch):
    """Ensure a clean configuration environment for each test.

    Clears SWORD_RESULT_* env vars and the cached default config so one
    test's settings never leak into another.
    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        yield
        return

    for key in list(os.environ.keys()):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    _default_config.cache_clear()
    yield
    _default_config.cache_clear()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def debug_library_logging():
    """Let caplog see the library's DEBUG records."""
    logging.getLogger("sword_result").setLevel(logging.DEBUG)

