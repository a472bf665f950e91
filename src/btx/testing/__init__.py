"""btx testing utilities.

Modules:
    mocks: MockNode (scriptable Bitcoin Core stand-in on httpx.MockTransport)
           and EventRecorder (telemetry handler keeping every event).
    assertions: assert_response, assert_method_error, assert_transport_error.
    fixtures: Pytest fixtures (mock_node, event_recorder, rpc_client) and the
              mock_client() context manager.

Example:
    >>> from btx.testing import MockNode, assert_response
    >>> from btx.testing.fixtures import mock_client
"""

from btx.testing.assertions import (
    assert_method_error,
    assert_response,
    assert_transport_error,
)
from btx.testing.mocks import EventRecorder, MockNode

__all__ = [
    "EventRecorder",
    "MockNode",
    "assert_method_error",
    "assert_response",
    "assert_transport_error",
]
