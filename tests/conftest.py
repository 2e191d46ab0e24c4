"""Pytest configuration and fixtures.

Provides environment isolation and marker registration. All fixtures here are
autouse unless noted.
"""

from __future__ import annotations

import os

import pytest

from verdict.config import reset_settings_cache

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr("verdict.config.load_dotenv", lambda *_args, **_kwargs: False)


@pytest.fixture(autouse=True)
def isolate_verdict_env(monkeypatch):
    """Clear VERDICT_* variables and the cached default settings per test."""
    for key in list(os.environ.keys()):
        if key.startswith("VERDICT_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: End-to-end scenarios across modules",
        "allow_dotenv: Let python-dotenv read .env files",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)
