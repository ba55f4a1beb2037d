"""Shared pytest configuration for MCP Sentry tests."""

import os
from collections.abc import Callable
from unittest.mock import patch

import httpx
import pytest

from mcp_sentry.logging_config import null_logger
from mcp_sentry.sentry import SentryFetcher
from mcp_sentry.sentry.config import SentryConfig

from tests.utils.sentry_http import RecordingTransport


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for Sentry."""
    with patch.dict(
        os.environ,
        {
            "SENTRY_HOST": "https://sentry.example.com",
            "SENTRY_ACCESS_TOKEN": "sntrys_test_token",
        },
        clear=True,
    ):
        yield


@pytest.fixture
def sentry_config():
    """Create a SentryConfig instance for tests."""
    return SentryConfig(
        url="https://sentry.example.com",
        access_token="sntrys_test_token",
        ssl_verify=True,
        timeout=5.0,
    )


@pytest.fixture
def make_fetcher(sentry_config):
    """Build a SentryFetcher whose requests are answered by ``handler``."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]):
        transport = RecordingTransport(handler)
        fetcher = SentryFetcher(
            sentry_config, transport=transport, logger=null_logger()
        )
        return fetcher, transport

    return _make


@pytest.fixture
def anyio_backend():
    """Run async tests on asyncio only."""
    return "asyncio"
