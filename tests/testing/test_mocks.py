"""Unit tests for MockNode and EventRecorder (btx.testing.mocks)."""

import json

import httpx
import pytest

from btx.rpc.telemetry import CallEvent, EventName
from btx.testing.mocks import EventRecorder, MockNode


def _rpc_request(method: str, request_id: str = "req-1", path: str = "/") -> httpx.Request:
    body = {"jsonrpc": "1.0", "id": request_id, "method": method, "params": []}
    return httpx.Request("POST", f"http://localhost:18443{path}", content=json.dumps(body))


class TestMockNode:
    """Tests for MockNode answers and request recording."""

    def test_set_result(self) -> None:
        node = MockNode()
        node.set_result("getblockcount", 101)
        response = node.handle(_rpc_request("getblockcount"))
        assert response.status_code == 200
        assert response.json() == {"result": 101, "error": None, "id": "req-1"}

    def test_set_error_defaults_to_500(self) -> None:
        node = MockNode()
        node.set_error("getbalance", -18, "Requested wallet does not exist")
        response = node.handle(_rpc_request("getbalance"))
        assert response.status_code == 500
        assert response.json()["error"] == {
            "code": -18,
            "message": "Requested wallet does not exist",
        }

    def test_unknown_method_is_404(self) -> None:
        response = MockNode().handle(_rpc_request("nosuchmethod"))
        assert response.status_code == 404
        assert response.json()["error"]["code"] == -32601

    def test_script_is_consumed_before_results(self) -> None:
        node = MockNode()
        node.set_result("getblockcount", 101)
        node.enqueue_reply(503)
        node.enqueue_reply(200, {"result": 7, "error": None})

        assert node.handle(_rpc_request("getblockcount")).status_code == 503
        scripted = node.handle(_rpc_request("getblockcount", request_id="req-2"))
        assert scripted.json() == {"result": 7, "error": None, "id": "req-2"}
        assert node.handle(_rpc_request("getblockcount")).json()["result"] == 101

    def test_text_reply(self) -> None:
        node = MockNode()
        node.enqueue_reply(418, "I'm a teapot")
        response = node.handle(_rpc_request("getblockcount"))
        assert response.status_code == 418
        assert response.text == "I'm a teapot"

    def test_enqueue_exception(self) -> None:
        node = MockNode()
        node.enqueue_exception(httpx.ConnectError("[Errno 111] Connection refused"))
        with pytest.raises(httpx.ConnectError):
            node.handle(_rpc_request("getblockcount"))
        assert len(node.requests) == 1

    def test_records_payloads_and_paths(self) -> None:
        node = MockNode()
        node.handle(_rpc_request("getbalance", path="/wallet/hot"))
        node.handle(_rpc_request("getblockcount"))
        assert [payload["method"] for payload in node.payloads] == ["getbalance", "getblockcount"]
        assert node.paths == ["/wallet/hot", "/"]

    def test_transport(self) -> None:
        node = MockNode()
        node.set_result("getblockcount", 5)
        with httpx.Client(transport=node.transport(), base_url="http://node") as client:
            response = client.post("/", content=json.dumps({"id": "a", "method": "getblockcount"}))
        assert response.json()["result"] == 5


class TestEventRecorder:
    def test_records_in_order(self) -> None:
        recorder = EventRecorder()
        recorder(CallEvent(EventName.START))
        recorder(CallEvent(EventName.RETRY))
        recorder(CallEvent(EventName.STOP))

        assert recorder.names == ["start", "retry", "stop"]
        assert len(recorder.of("retry")) == 1
        assert recorder.of(EventName.EXCEPTION) == []

    def test_clear(self) -> None:
        recorder = EventRecorder()
        recorder(CallEvent(EventName.START))
        recorder.clear()
        assert recorder.events == []
