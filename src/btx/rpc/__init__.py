"""JSON-RPC client for Bitcoin Core.

Public exports:
    RPCClient: Synchronous client; ``call`` returns a classified outcome
    call: Dispatch a request through a client
    call_or_raise: Dispatch and raise MethodError/TransportError
    ClientConfig: Immutable client configuration
    CallOptions: Per-call options
    Request: Outgoing wire request
    Response: Successful reply
    Encodable: Protocol every sendable request implements
    RequestSchema: Base class for typed request schemas
    WalletRequestSchema: Base class for wallet-scoped request schemas
    RawRequest: Request for methods without a schema
    ResultSchema: Base class for decoded results
    call_decoded: Dispatch and decode a successful result
    RetryConfig: Retry and backoff configuration
    RetryPolicy: Retry decisions on classified outcomes
    Telemetry: Call lifecycle event dispatch
    CallEvent: A telemetry event
    metrics_handler: Telemetry handler feeding a MetricsCollector

Example:
    >>> from btx.rpc import RPCClient
    >>> from btx.rpc.methods import GetBlockCount
    >>> with RPCClient(password="secret") as client:
    ...     response = client.call_or_raise(GetBlockCount())
"""

from btx.rpc.classifier import Outcome, classify_exception, classify_response
from btx.rpc.client import RPCClient, call, call_or_raise
from btx.rpc.encodable import Encodable, RawRequest, RequestSchema, WalletRequestSchema
from btx.rpc.options import CallOptions, ClientConfig
from btx.rpc.request import Request, Response
from btx.rpc.results import (
    ResultSchema,
    call_decoded,
    call_decoded_or_raise,
    decode_outcome,
)
from btx.rpc.retry import BackoffStrategy, RetryConfig, RetryPolicy
from btx.rpc.telemetry import CallEvent, EventName, Telemetry, metrics_handler

__all__ = [
    "BackoffStrategy",
    "CallEvent",
    "CallOptions",
    "ClientConfig",
    "Encodable",
    "EventName",
    "Outcome",
    "RPCClient",
    "RawRequest",
    "Request",
    "RequestSchema",
    "Response",
    "ResultSchema",
    "RetryConfig",
    "RetryPolicy",
    "Telemetry",
    "WalletRequestSchema",
    "call",
    "call_decoded",
    "call_decoded_or_raise",
    "call_or_raise",
    "classify_exception",
    "classify_response",
    "decode_outcome",
    "metrics_handler",
]
