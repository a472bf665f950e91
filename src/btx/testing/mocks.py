"""Mock Bitcoin Core node and telemetry recording for btx tests.

MockNode answers JSON-RPC requests through ``httpx.MockTransport``, so the
real client, classifier and retry loop run unchanged against it.

Features:
    - Pre-set results or daemon errors per RPC method.
    - A script of one-shot replies (status + body) or transport exceptions,
      consumed in order before per-method answers.
    - Request recording (decoded bodies and paths) for assertions.
"""

from __future__ import annotations

import json
import threading
from collections import deque
from typing import Any

import httpx

from btx.rpc.telemetry import CallEvent, EventName

# Bitcoin Core answers unknown methods with 404 and RPC_METHOD_NOT_FOUND
_METHOD_NOT_FOUND = -32601


class MockNode:
    """Scriptable stand-in for a Bitcoin Core RPC server.

    Attributes:
        requests: Every httpx.Request received, in order
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: dict[str, Any] = {}
        self._errors: dict[str, tuple[int, int, str]] = {}
        self._script: deque[tuple[int, Any] | BaseException] = deque()
        self.requests: list[httpx.Request] = []

    def set_result(self, method: str, result: Any) -> None:
        """Answer ``method`` with a successful ``result``."""
        self._results[method] = result

    def set_error(self, method: str, code: int, message: str, status: int = 500) -> None:
        """Answer ``method`` with a daemon error object (HTTP 500 by default)."""
        self._errors[method] = (status, code, message)

    def enqueue_reply(self, status: int, body: Any = None) -> None:
        """Queue a one-shot reply. Dict bodies without an ``id`` get the request id."""
        self._script.append((status, body))

    def enqueue_exception(self, exc: BaseException) -> None:
        """Queue a one-shot transport failure raised instead of replying."""
        self._script.append(exc)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def payloads(self) -> list[dict[str, Any]]:
        """Decoded JSON bodies of the received requests."""
        return [json.loads(request.content) for request in self.requests]

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def handle(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
            step = self._script.popleft() if self._script else None

        payload = json.loads(request.content)
        request_id = payload.get("id")
        method = payload.get("method")

        if isinstance(step, BaseException):
            raise step
        if step is not None:
            status, body = step
            if isinstance(body, dict) and "id" not in body:
                body = {**body, "id": request_id}
            if body is None:
                return httpx.Response(status)
            if isinstance(body, (dict, list)):
                return httpx.Response(status, json=body)
            return httpx.Response(status, text=str(body))

        if method in self._errors:
            status, code, message = self._errors[method]
            return httpx.Response(
                status,
                json={"result": None, "error": {"code": code, "message": message}, "id": request_id},
            )
        if method in self._results:
            return httpx.Response(
                200, json={"result": self._results[method], "error": None, "id": request_id}
            )
        return httpx.Response(
            404,
            json={
                "result": None,
                "error": {"code": _METHOD_NOT_FOUND, "message": "Method not found"},
                "id": request_id,
            },
        )


class EventRecorder:
    """Telemetry handler that keeps every event it receives.

    Register an instance in ``ClientConfig.handlers``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.events: list[CallEvent] = []

    def __call__(self, event: CallEvent) -> None:
        with self._lock:
            self.events.append(event)

    @property
    def names(self) -> list[str]:
        return [event.name.value for event in self.events]

    def of(self, name: EventName | str) -> list[CallEvent]:
        """Events with the given name, in emission order."""
        name = EventName(name)
        return [event for event in self.events if event.name is name]

    def clear(self) -> None:
        with self._lock:
            self.events.clear()
