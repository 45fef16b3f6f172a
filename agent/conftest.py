"""Fixtures shared by every test under agent/."""

from __future__ import annotations

import pytest
import structlog

from shared.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from NetCores settings in the environment."""
    for name in (
        "NETCORES_API_URL",
        "NETCORES_TIMEOUT",
        "NETCORES_RETRY_ATTEMPTS",
        "NETCORES_RETRY_DELAY_MS",
        "SERVICE_AUTH_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
