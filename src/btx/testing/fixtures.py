"""Pytest fixtures and context managers for btx tests.

Fixtures (use with pytest):
    mock_node: Scriptable mock Bitcoin Core node.
    event_recorder: Telemetry handler recording every event.
    rpc_client: RPCClient wired to mock_node and event_recorder, retrying
        without delay.

Context managers:
    mock_client(): Sync context manager yielding a client backed by a MockNode.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import pytest

from btx.rpc.client import RPCClient
from btx.rpc.options import ClientConfig
from btx.rpc.retry import RetryConfig
from btx.testing.mocks import EventRecorder, MockNode

DEFAULT_TEST_BASE_URL = "http://localhost:18443"


def build_test_config(node: MockNode, *handlers: Any, **overrides: Any) -> ClientConfig:
    """ClientConfig pointing at ``node`` with zero-delay, jitter-free retries."""
    values: dict[str, Any] = {
        "base_url": DEFAULT_TEST_BASE_URL,
        "username": "btx",
        "password": "btx-password",
        "transport": node.transport(),
        "retry": RetryConfig(delay=0.0, jitter=False),
        "handlers": handlers,
    }
    values.update(overrides)
    return ClientConfig(**values)


@pytest.fixture
def mock_node() -> MockNode:
    """Create a fresh MockNode for the test."""
    return MockNode()


@pytest.fixture
def event_recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def rpc_client(mock_node: MockNode, event_recorder: EventRecorder) -> Iterator[RPCClient]:
    """Provide an RPCClient talking to ``mock_node``; closed after the test."""
    with RPCClient(build_test_config(mock_node, event_recorder)) as client:
        yield client


@contextmanager
def mock_client(**overrides: Any) -> Iterator[tuple[RPCClient, MockNode]]:
    """Context manager yielding a client and the MockNode behind it.

    Example:
        >>> with mock_client() as (client, node):
        ...     node.set_result("getblockcount", 101)
        ...     client.call_or_raise(GetBlockCount()).result
        101
    """
    node = MockNode()
    with RPCClient(build_test_config(node, **overrides)) as client:
        yield client, node
