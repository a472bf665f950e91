"""btx Error Taxonomy.

Two irreducible error families come out of a JSON-RPC call:

- MethodError: the daemon understood the call and rejected it. Final, never
  retried, actionable through its ``reason`` tag.
- TransportError: the call did not complete as a semantic round-trip (bad HTTP
  status, malformed body, timeout, refused connection...). Possibly transient.

Both are exceptions so ``call_or_raise`` can raise the value itself, but
``call`` hands them back as plain return values.
"""

from __future__ import annotations

from typing import Any

from btx.models.enums import MethodErrorReason, TransportErrorReason


class BTxError(Exception):
    """Base exception for all btx errors.

    Attributes:
        kind: Error kind following the btx:<area>/<name> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, kind: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{kind, message, details}`` dict."""
        return {
            "kind": self.kind,
            "message": self.message,
            "details": self.details,
        }


class MethodError(BTxError):
    """Error reported by Bitcoin Core itself for a call it received.

    Attributes:
        id: Id of the request the daemon answered
        code: Daemon error code (see MethodErrorReason)
        message: Error text from the daemon
        reason: Semantic tag derived from ``code``

    Example:
        >>> err = MethodError(id="x", code=-6, message="Insufficient funds")
        >>> err.reason
        <MethodErrorReason.WALLET_INSUFFICIENT_FUNDS: 'wallet_insufficient_funds'>
        >>> str(err)
        'Insufficient funds'
    """

    def __init__(
        self,
        id: str | None,
        code: int,
        message: str,
        reason: MethodErrorReason | None = None,
    ) -> None:
        self.id = id
        self.code = code
        self.reason = reason if reason is not None else MethodErrorReason.from_code(code)
        super().__init__(
            kind="btx:rpc/method_error",
            message=message,
            details={"id": id, "code": code, "reason": self.reason.value},
        )


_TRANSPORT_MESSAGES: dict[TransportErrorReason, str] = {
    TransportErrorReason.HTTP_BAD_REQUEST: (
        "Bad Request: The request is invalid. "
        "Please check the request parameters and ensure they are correct."
    ),
    TransportErrorReason.HTTP_UNAUTHORIZED: (
        "Unauthorized: RPC credentials are missing or incorrect. "
        "Please check your Bitcoin Core `rpcuser` and `rpcpassword` configuration."
    ),
    TransportErrorReason.HTTP_FORBIDDEN: (
        "Forbidden: Access denied to Bitcoin Core RPC. "
        "This usually means your IP address is not in the `rpcallowip` list or "
        "other access restrictions are in place. Check your Bitcoin Core configuration."
    ),
    TransportErrorReason.HTTP_NOT_FOUND: (
        "Not Found: The RPC endpoint does not exist. "
        "Please check the URL and ensure Bitcoin Core is running with RPC enabled."
    ),
    TransportErrorReason.HTTP_METHOD_NOT_ALLOWED: (
        "Method Not Allowed: Invalid HTTP method used for RPC request. "
        "Bitcoin Core RPC requires POST requests with JSON-RPC payload."
    ),
    TransportErrorReason.HTTP_INTERNAL_SERVER_ERROR: (
        "Internal Server Error: Bitcoin Core failed to handle the request. "
        "Please check if Bitcoin Core is running and try again."
    ),
    TransportErrorReason.HTTP_BAD_GATEWAY: (
        "Bad Gateway: Bitcoin Core is overloaded. "
        "Please try again later or check if Bitcoin Core is running."
    ),
    TransportErrorReason.HTTP_SERVICE_UNAVAILABLE: (
        "Service Unavailable: Bitcoin Core RPC service is temporarily unavailable. "
        "This can happen during startup, shutdown, or when the node is overloaded. "
        "Please wait and retry."
    ),
    TransportErrorReason.HTTP_GATEWAY_TIMEOUT: (
        "Gateway Timeout: Bitcoin Core is taking too long to respond. "
        "Please check if Bitcoin Core is running and try again."
    ),
    TransportErrorReason.UNKNOWN_ERROR: (
        "Unknown Error: An unexpected error occurred during RPC communication."
    ),
    TransportErrorReason.TIMEOUT: (
        "Timeout: Bitcoin Core did not answer within the configured timeout."
    ),
    TransportErrorReason.CONNECTION_REFUSED: (
        "Connection Refused: Nothing is listening on the RPC address. "
        "Verify Bitcoin Core is running with `server=1` and the port is correct."
    ),
    TransportErrorReason.NAME_RESOLUTION_FAILURE: (
        "Name Resolution Failure: The RPC host name could not be resolved. "
        "Check the host part of the base URL."
    ),
    TransportErrorReason.CONNECTION_ERROR: (
        "Connection Error: Could not establish a connection to Bitcoin Core."
    ),
    TransportErrorReason.PROTOCOL_ERROR: (
        "Protocol Error: The connection was closed or the HTTP exchange was malformed."
    ),
    TransportErrorReason.TRANSPORT_ERROR: (
        "Transport Error: The HTTP transport failed before a response was received."
    ),
}


class TransportError(BTxError):
    """Error raised when a call did not yield a semantic daemon reply.

    Attributes:
        reason: Classified reason (HTTP status tag or transport failure tag)
        metadata: Context needed to diagnose the failure without re-running
            the call: ``status``, ``body``, ``exception``, ``method``, ``id``,
            ``path`` (whichever apply)

    Example:
        >>> err = TransportError(TransportErrorReason.HTTP_UNAUTHORIZED)
        >>> err.reason.value
        'http_unauthorized'
    """

    def __init__(
        self,
        reason: TransportErrorReason,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        self.reason = TransportErrorReason(reason)
        self.metadata = dict(metadata or {})
        super().__init__(
            kind=f"btx:transport/{self.reason.value}",
            message=_format_message(self.reason, self.metadata),
            details=self.metadata,
        )

    @property
    def is_transport_failure(self) -> bool:
        """True when no HTTP response was received at all."""
        return self.reason.is_transport_failure()


def _format_message(reason: TransportErrorReason, metadata: dict[str, Any]) -> str:
    message = _TRANSPORT_MESSAGES[reason]
    exception = metadata.get("exception")
    if exception is not None:
        message = f"{message} Underlying error: {type(exception).__name__}: {exception}"
    context = {k: v for k, v in metadata.items() if k != "exception"}
    if context:
        rendered = ", ".join(f"{k}={v!r}" for k, v in context.items())
        message = f"{message}\n\nError metadata: {rendered}"
    return message
