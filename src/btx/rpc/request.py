"""JSON-RPC wire models for Bitcoin Core.

Bitcoin Core speaks the legacy JSON-RPC 1.0 dialect over HTTP POST:

    request:  {"jsonrpc": "1.0", "id": "...", "method": "...", "params": [...]}
    success:  {"id": "...", "result": <any>, "error": null}
    failure:  {"id": "...", "result": null, "error": {"code": -18, "message": "..."}}

Params are positional. The HTTP path is not part of the body: it selects the
endpoint (``/`` or ``/wallet/<name>``) and travels next to the request.

Example:
    >>> request = Request(method="getblockcount")
    >>> request.to_wire()["params"]
    []
    >>> request.path
    '/'
"""

from typing import Any, Literal

from pydantic import Field

from btx.models.base import BTxBaseModel
from btx.models.constants import JSONRPC_VERSION, ROOT_PATH
from btx.models.ids import generate_request_id

WIRE_FIELDS = frozenset({"jsonrpc", "id", "method", "params"})


class Request(BTxBaseModel):
    """Outgoing JSON-RPC request.

    Attributes:
        id: Unique per call; a ``btx-<ULID>`` id is generated when omitted
        jsonrpc: Protocol version (always "1.0")
        method: RPC method name
        params: Positional parameters, already trimmed of absent trailing values
        path: HTTP path the request is posted to (never serialized in the body)
    """

    id: str = Field(default_factory=generate_request_id, min_length=1)
    jsonrpc: Literal["1.0"] = JSONRPC_VERSION
    method: str = Field(min_length=1)
    params: list[Any] = Field(default_factory=list)
    path: str = ROOT_PATH

    def with_id(self, request_id: str) -> "Request":
        """Return a copy carrying a caller-supplied id."""
        return self.model_copy(update={"id": request_id})

    def with_path(self, path: str) -> "Request":
        """Return a copy routed to an explicit path."""
        return self.model_copy(update={"path": path})

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON body: exactly the four wire fields."""
        return self.model_dump(include=set(WIRE_FIELDS))


class Response(BTxBaseModel):
    """Successful JSON-RPC reply.

    ``result`` is handed as-is to whoever decodes the method-specific shape.
    """

    id: str | int | None
    result: Any = None
