"""Synchronous JSON-RPC client for Bitcoin Core.

This module provides the dispatcher: it turns an encodable request into a
single classified outcome, running encode -> route -> send -> classify ->
retry -> observe for every call.

The client is built from an immutable :class:`~btx.rpc.options.ClientConfig`
and holds no per-call state, so one instance can serve many threads at once.
Each call blocks until its final outcome is known, retries included.

Example:
    >>> from btx.rpc import RPCClient
    >>> from btx.rpc.methods import GetBlockCount
    >>>
    >>> with RPCClient(base_url="http://127.0.0.1:18443", username="u", password="p") as client:
    ...     outcome = client.call(GetBlockCount())
    ...     if isinstance(outcome, Response):
    ...         print(outcome.result)
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel

from btx.errors import MethodError
from btx.observability.logging import call_context, get_logger, sanitize_for_logging
from btx.rpc.classifier import (
    Outcome,
    classify_exception,
    classify_response,
    decode_body,
    is_transport_exception,
)
from btx.rpc.encodable import Encodable
from btx.rpc.options import CallOptions, ClientConfig
from btx.rpc.request import Request, Response
from btx.rpc.retry import RetryContext, RetryPolicy
from btx.rpc.telemetry import EventName, Telemetry
from btx.utils.sanitization import sanitize_headers, sanitize_url

logger = get_logger(__name__)


class RPCClient:
    """Client for a Bitcoin Core JSON-RPC endpoint.

    Attributes:
        config: The immutable configuration the client was built from
        policy: Retry policy derived from ``config.retry``

    Example:
        >>> client = RPCClient(ClientConfig(password="secret"))
        >>> outcome = client.call(RawRequest(method="getblockcount"))
        >>> client.close()
    """

    def __init__(self, config: ClientConfig | None = None, **overrides: Any) -> None:
        """Initialize the client.

        Args:
            config: Client configuration; defaults are used when omitted
            **overrides: ClientConfig fields replacing those of ``config``

        Raises:
            pydantic.ValidationError: If the resulting configuration is invalid
        """
        if config is None:
            config = ClientConfig(**overrides)
        elif overrides:
            config = ClientConfig(**{**dict(config), **overrides})

        self.config = config
        self.policy = RetryPolicy(config.retry)
        self._telemetry = Telemetry(config.handlers)
        self._client = httpx.Client(
            base_url=config.base_url,
            auth=httpx.BasicAuth(config.username, config.password.get_secret_value()),
            headers=list(config.headers),
            timeout=config.timeout,
            transport=config.transport,
        )

    def __enter__(self) -> "RPCClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release pooled HTTP connections."""
        self._client.close()

    def call(self, request: Encodable, **options: Any) -> Outcome:
        """Dispatch ``request`` and return its classified outcome.

        Errors are returned, not raised: the result is a Response, a
        MethodError or a TransportError.

        Args:
            request: Any value implementing the Encodable protocol
            **options: Per-call options (see CallOptions)

        Returns:
            The final outcome, after any retries

        Raises:
            pydantic.ValidationError: If an option is unknown or invalid
        """
        call_options = CallOptions(**options)

        wire_request = request.encode()
        if call_options.id is not None:
            wire_request = wire_request.with_id(call_options.id)
        if call_options.path is not None:
            wire_request = wire_request.with_path(call_options.path)

        metadata = {
            "client": self.config,
            "method": wire_request.method,
            "method_object": request,
            "id": wire_request.id,
            "path": wire_request.path,
        }
        with call_context(request_id=wire_request.id, method=wire_request.method):
            return self._telemetry.span(
                metadata, lambda: self._dispatch(wire_request, call_options, metadata)
            )

    def call_or_raise(self, request: Encodable, **options: Any) -> Response:
        """Like :meth:`call`, but raise MethodError/TransportError instead of returning them."""
        outcome = self.call(request, **options)
        if isinstance(outcome, Response):
            return outcome
        raise outcome

    def _dispatch(
        self,
        request: Request,
        options: CallOptions,
        metadata: Mapping[str, Any],
    ) -> tuple[Outcome, dict[str, Any]]:
        start_time = time.perf_counter()
        sanitized_url = sanitize_url(self.config.base_url)
        retry = RetryContext(self.policy, enabled=self.config.automatic_retry)
        context = {"id": request.id, "method": request.method, "path": request.path}

        logger.info(
            "btx.rpc.call",
            target_url=sanitized_url,
            path=request.path,
            method=request.method,
            request_id=request.id,
            max_retries=retry.remaining,
            headers=sanitize_headers({**dict(self.config.headers), **(options.headers or {})}),
        )

        method_object = metadata.get("method_object")
        if isinstance(method_object, BaseModel):
            logger.debug(
                "btx.rpc.request",
                request_id=request.id,
                fields=sanitize_for_logging(method_object.model_dump(exclude_none=True)),
            )

        content = self.config.json_codec.dumps(request.to_wire())

        attempts = 0
        while True:
            attempts += 1
            outcome = self._attempt(request, content, options, context)
            if options.is_cancelled() or not retry.should_retry(outcome):
                break

            delay = retry.next_delay()
            self._telemetry.emit(
                EventName.RETRY,
                {"delay": delay},
                {**metadata, "attempt": retry.retries, "reason": outcome},
            )
            logger.warning(
                "btx.rpc.retry",
                target_url=sanitized_url,
                method=request.method,
                request_id=request.id,
                attempt=retry.retries,
                max_retries=self.policy.config.max_retries,
                reason=outcome.reason.value,
                delay_seconds=round(delay, 3),
                message=(
                    f"{outcome.reason.value} on {request.method} "
                    f"(retry {retry.retries}/{self.policy.config.max_retries}), "
                    f"retrying in {delay:.2f}s"
                ),
            )
            if options.cancel_event is not None:
                options.cancel_event.wait(delay)
            else:
                time.sleep(delay)
            if options.is_cancelled():
                break

        duration_ms = (time.perf_counter() - start_time) * 1000

        if isinstance(outcome, Response):
            logger.info(
                "btx.rpc.response",
                target_url=sanitized_url,
                method=request.method,
                request_id=request.id,
                duration_ms=round(duration_ms, 2),
                attempts=attempts,
            )
            return outcome, {"status": "ok", "result": outcome.result}

        logger.warning(
            "btx.rpc.error",
            target_url=sanitized_url,
            method=request.method,
            request_id=request.id,
            error_type=type(outcome).__name__,
            reason=outcome.reason.value,
            code=outcome.code if isinstance(outcome, MethodError) else None,
            duration_ms=round(duration_ms, 2),
            attempts=attempts,
            cancelled=options.is_cancelled(),
        )
        return outcome, {"status": "error", "reason": outcome}

    def _attempt(
        self,
        request: Request,
        content: str | bytes,
        options: CallOptions,
        context: Mapping[str, Any],
    ) -> Outcome:
        """Run one HTTP round-trip and classify it."""
        try:
            response = self._client.post(
                request.path,
                content=content,
                headers=options.headers,
                timeout=(
                    options.timeout if options.timeout is not None else httpx.USE_CLIENT_DEFAULT
                ),
                extensions=options.extensions,
            )
        except Exception as e:
            if not is_transport_exception(e):
                logger.exception(
                    "btx.rpc.error",
                    target_url=sanitize_url(self.config.base_url),
                    method=request.method,
                    request_id=request.id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise
            return classify_exception(e, context)

        body = decode_body(response.content, self.config.json_codec)
        return classify_response(response.status_code, body, context)


def call(client: RPCClient, request: Encodable, **options: Any) -> Outcome:
    """Dispatch ``request`` through ``client``; see :meth:`RPCClient.call`."""
    return client.call(request, **options)


def call_or_raise(client: RPCClient, request: Encodable, **options: Any) -> Response:
    """Dispatch ``request`` and raise error outcomes; see :meth:`RPCClient.call_or_raise`."""
    return client.call_or_raise(request, **options)
