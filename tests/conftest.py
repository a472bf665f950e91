"""Shared pytest fixtures for btx tests.

The btx.testing plugin provides mock_node, event_recorder and rpc_client.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
import structlog
from structlog.testing import capture_logs

from btx.observability.logging import configure_logging

# Load btx.testing fixtures (mock_node, event_recorder, rpc_client)
pytest_plugins = ["btx.testing.fixtures"]

# Sample values accepted by the request schema validators
SAMPLE_TXID = "a" * 64
SAMPLE_BLOCKHASH = "00000000000000000001" + "b" * 44
SAMPLE_BECH32_ADDRESS = "bcrt1qjqmxmkpmxt80xz4y3746zgt0q3u3ferr34acd5"
SAMPLE_BASE58_ADDRESS = "mipcBbFg9gMiCh81Kj8tqqdgoZub1ZJRfn"


def pytest_configure(config: pytest.Config) -> None:
    configure_logging(log_format="console", log_level="DEBUG", force=True)
    # capture_logs only sees loggers that are not cached yet
    structlog.configure(cache_logger_on_first_use=False)


@pytest.fixture(autouse=True)
def _uncached_loggers() -> Iterator[None]:
    """Undo logger caching turned on by tests that reconfigure logging."""
    yield
    structlog.configure(cache_logger_on_first_use=False)


@pytest.fixture
def log_events() -> Iterator[list[dict[str, Any]]]:
    """Capture structlog events emitted during the test."""
    with capture_logs() as events:
        yield events
