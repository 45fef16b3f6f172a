"""Fixtures for NetCores module tests."""

from __future__ import annotations

import pytest

from modules.netcores.client import NetCoresClient
from modules.netcores.dispatcher import Dispatcher
from modules.netcores.tests.fixtures import BASE_URL, FakeNetCoresAPI


@pytest.fixture
def fake_api():
    return FakeNetCoresAPI()


@pytest.fixture
def sleeps(monkeypatch):
    """Record backoff delays instead of waiting them out."""
    delays: list[float] = []

    async def _sleep(delay):
        delays.append(delay)

    monkeypatch.setattr("modules.netcores.client.asyncio.sleep", _sleep)
    return delays


@pytest.fixture
def client(fake_api, sleeps):
    return NetCoresClient(BASE_URL + "/", transport=fake_api.transport())


@pytest.fixture
def dispatcher(client):
    return Dispatcher.for_client(client)
