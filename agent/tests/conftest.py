"""Fixtures for the CLI tests."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from modules.netcores.client import NetCoresClient
from modules.netcores.tests.fixtures import BASE_URL, FakeNetCoresAPI


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fake_api():
    return FakeNetCoresAPI()


@pytest.fixture
def cli_client(fake_api):
    """Route every CLI command through a client backed by ``fake_api``."""
    client = NetCoresClient(
        BASE_URL, retry_attempts=1, retry_delay=0, transport=fake_api.transport()
    )
    with patch("cli._client", return_value=client):
        yield client
