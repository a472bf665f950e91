"""Client and per-call options.

``ClientConfig`` is the immutable configuration a client is built from: the
node URL and credentials, static headers, the HTTP transport ("adapter"), the
default timeout and retry policy, the JSON codec and the telemetry handlers.
It is frozen, so one instance can back any number of concurrent calls.

``CallOptions`` validates the keyword options of a single call; unknown keys
are rejected.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import urlparse

import httpx
from pydantic import ConfigDict, Field, SecretStr, field_validator

from btx.models.base import BTxBaseModel
from btx.models.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_PASSWORD,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    DEFAULT_USERNAME,
)
from btx.rpc.retry import RetryConfig
from btx.rpc.telemetry import Handler

ENV_RPC_URL = "BTX_RPC_URL"
ENV_RPC_USER = "BTX_RPC_USER"
ENV_RPC_PASSWORD = "BTX_RPC_PASSWORD"
ENV_RPC_TIMEOUT = "BTX_RPC_TIMEOUT"

DEFAULT_HEADERS: tuple[tuple[str, str], ...] = (
    ("user-agent", DEFAULT_USER_AGENT),
    ("content-type", "application/json"),
    ("accept", "application/json"),
)


class JSONCodec(Protocol):
    """What the client needs from a JSON library (stdlib ``json`` fits)."""

    def dumps(self, obj: Any) -> str | bytes: ...

    def loads(self, data: str | bytes) -> Any: ...


class ClientConfig(BTxBaseModel):
    """Immutable client configuration.

    Attributes:
        base_url: Bitcoin Core RPC endpoint (http or https)
        username: RPC user (``rpcuser``)
        password: RPC password (``rpcpassword``); hidden from repr and logs
        headers: Static headers sent with every request
        timeout: Per-attempt timeout in seconds (None disables it)
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests
        automatic_retry: Retry retryable failures according to ``retry``
        retry: Retry and backoff configuration
        json_codec: Module or object providing ``dumps``/``loads``
        handlers: Telemetry handlers (see btx.rpc.telemetry)

    Example:
        >>> config = ClientConfig(base_url="http://127.0.0.1:18443", username="u", password="p")
        >>> config.base_url
        'http://127.0.0.1:18443'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
        validate_default=True,
    )

    base_url: str = DEFAULT_BASE_URL
    username: str = DEFAULT_USERNAME
    password: SecretStr = SecretStr(DEFAULT_PASSWORD)
    headers: tuple[tuple[str, str], ...] = DEFAULT_HEADERS
    timeout: float | None = Field(default=DEFAULT_TIMEOUT, gt=0)
    transport: httpx.BaseTransport | None = None
    automatic_retry: bool = True
    retry: RetryConfig = Field(default_factory=RetryConfig)
    json_codec: Any = json
    handlers: tuple[Handler, ...] = ()

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(
                f"Invalid base_url format: {value}. "
                "Must be a valid URL (e.g., http://localhost:8332)"
            )
        if parsed.scheme.lower() not in ("http", "https"):
            raise ValueError(
                f"Invalid URL scheme: {parsed.scheme}. Only 'http' and 'https' are allowed."
            )
        return value.rstrip("/")

    @field_validator("headers", mode="before")
    @classmethod
    def _merge_headers(cls, value: Any) -> Any:
        # caller headers override defaults by case-insensitive name
        pairs = value.items() if isinstance(value, Mapping) else value
        try:
            custom = [(str(name), str(header)) for name, header in pairs]
        except (TypeError, ValueError):
            return value
        overridden = {name.lower() for name, _ in custom}
        kept = [pair for pair in DEFAULT_HEADERS if pair[0] not in overridden]
        return tuple(kept + custom)

    @field_validator("json_codec")
    @classmethod
    def _validate_codec(cls, value: Any) -> Any:
        if not (callable(getattr(value, "dumps", None)) and callable(getattr(value, "loads", None))):
            raise ValueError("json_codec must provide callable dumps() and loads()")
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """Build a config from BTX_RPC_* environment variables.

        Explicit keyword overrides win over the environment; unset variables
        fall back to the defaults.
        """
        values: dict[str, Any] = {}
        if url := os.environ.get(ENV_RPC_URL):
            values["base_url"] = url
        if user := os.environ.get(ENV_RPC_USER):
            values["username"] = user
        if password := os.environ.get(ENV_RPC_PASSWORD):
            values["password"] = password
        if timeout := os.environ.get(ENV_RPC_TIMEOUT):
            values["timeout"] = float(timeout)
        values.update(overrides)
        return cls(**values)


class CallOptions(BTxBaseModel):
    """Options accepted by a single call.

    Attributes:
        id: Request id overriding the generated one
        path: Endpoint path overriding the one computed by the encoder. Only
            meant for methods without a schema; prefer ``wallet_name``
        timeout: Per-attempt timeout for this call (httpx passthrough)
        headers: Extra headers for this call (httpx passthrough)
        extensions: httpx request extensions (passthrough)
        cancel_event: Once set, no further attempt is started
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    id: str | None = Field(default=None, min_length=1)
    path: str | None = Field(default=None, pattern=r"^/")
    timeout: float | None = Field(default=None, gt=0)
    headers: dict[str, str] | None = None
    extensions: dict[str, Any] | None = None
    cancel_event: threading.Event | None = None

    def is_cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()
