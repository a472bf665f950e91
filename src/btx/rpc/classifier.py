"""Error classifier: raw transport outcome -> Response | MethodError | TransportError.

Every attempt of a call goes through exactly one of two entry points:

- :func:`classify_response` when an HTTP response was received
- :func:`classify_exception` when the transport failed before any response

Both are pure: they only look at their inputs. The retry policy consumes the
same outcomes, so retry decisions never diverge from what the caller sees.

Mapping for received responses:

    2xx with non-null "error" object     -> MethodError
    2xx with "result" and null "error"   -> Response (id must be str, int or null)
    500 with JSON-RPC "error" object     -> MethodError
    400/401/403/404/405/500/502/503/504  -> TransportError(http_*)
    anything else                        -> TransportError(unknown_error)
"""

import socket
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, Union

import httpx

from btx.errors import MethodError, TransportError
from btx.models.enums import HTTP_STATUS_REASONS, TransportErrorReason
from btx.rpc.request import Response

if TYPE_CHECKING:
    from btx.rpc.options import JSONCodec

Outcome = Union[Response, MethodError, TransportError]

# Substrings of resolver errors across libc/OS flavours
_NAME_RESOLUTION_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "no address associated with hostname",
    "getaddrinfo failed",
    "name resolution",
)
_CONNECTION_REFUSED_MARKERS = ("connection refused", "actively refused", "econnrefused")


def decode_body(content: bytes, codec: "JSONCodec") -> Any:
    """Decode a response body with ``codec``; undecodable bodies come back as text."""
    if not content:
        return None
    try:
        return codec.loads(content)
    except ValueError:
        return content.decode("utf-8", errors="replace")


def _error_object(body: Any) -> dict[str, Any] | None:
    if not isinstance(body, Mapping):
        return None
    error = body.get("error")
    if not isinstance(error, Mapping):
        return None
    code = error.get("code")
    if not isinstance(code, int) or isinstance(code, bool):
        return None
    return dict(error)


def _is_reply_id(value: Any) -> bool:
    # JSON-RPC ids are strings, integers or null
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, (str, int))


def _method_error(
    body: Mapping[str, Any], error: dict[str, Any], metadata: Mapping[str, Any]
) -> MethodError:
    request_id = body.get("id")
    if request_id is None:
        request_id = metadata.get("id")
    message = error.get("message")
    return MethodError(
        id=request_id,
        code=error["code"],
        message=message if isinstance(message, str) else "Unknown error",
    )


def classify_response(
    status: int,
    body: Any,
    metadata: Mapping[str, Any] | None = None,
) -> Outcome:
    """Classify a received HTTP response.

    Args:
        status: HTTP status code
        body: Decoded JSON body, or the raw text when it was not JSON
        metadata: Call context merged into any TransportError metadata

    Returns:
        The single outcome of this attempt
    """
    metadata = metadata or {}
    error = _error_object(body)

    if 200 <= status < 300:
        if error is not None:
            return _method_error(body, error, metadata)
        if (
            isinstance(body, Mapping)
            and "result" in body
            and body.get("error") is None
            and _is_reply_id(body.get("id"))
        ):
            return Response(id=body.get("id"), result=body["result"])
        return TransportError(
            TransportErrorReason.UNKNOWN_ERROR,
            {**metadata, "status": status, "body": body},
        )

    # Bitcoin Core reports most semantic errors with HTTP 500
    if status == 500 and error is not None:
        return _method_error(body, error, metadata)

    reason = HTTP_STATUS_REASONS.get(status, TransportErrorReason.UNKNOWN_ERROR)
    return TransportError(reason, {**metadata, "status": status, "body": body})


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def transport_failure_reason(exc: BaseException) -> TransportErrorReason:
    """Map a transport-level exception to its reason tag."""
    chain = list(_exception_chain(exc))

    if any(isinstance(e, (httpx.TimeoutException, TimeoutError, socket.timeout)) for e in chain):
        return TransportErrorReason.TIMEOUT
    if any(isinstance(e, socket.gaierror) for e in chain):
        return TransportErrorReason.NAME_RESOLUTION_FAILURE
    if any(isinstance(e, ConnectionRefusedError) for e in chain):
        return TransportErrorReason.CONNECTION_REFUSED

    text = " ".join(str(e).lower() for e in chain)
    if any(marker in text for marker in _NAME_RESOLUTION_MARKERS):
        return TransportErrorReason.NAME_RESOLUTION_FAILURE
    if any(marker in text for marker in _CONNECTION_REFUSED_MARKERS):
        return TransportErrorReason.CONNECTION_REFUSED

    if isinstance(exc, httpx.ProtocolError):
        return TransportErrorReason.PROTOCOL_ERROR
    if isinstance(exc, (httpx.NetworkError, ConnectionError)):
        return TransportErrorReason.CONNECTION_ERROR
    return TransportErrorReason.TRANSPORT_ERROR


def is_transport_exception(exc: BaseException) -> bool:
    """True for failures that mean no HTTP response was received."""
    return isinstance(exc, (httpx.TransportError, OSError))


def classify_exception(
    exc: BaseException,
    metadata: Mapping[str, Any] | None = None,
) -> TransportError:
    """Classify a transport failure (no HTTP response at all)."""
    return TransportError(
        transport_failure_reason(exc),
        {**(metadata or {}), "exception": exc},
    )
