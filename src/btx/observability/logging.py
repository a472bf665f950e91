"""structlog setup for the btx RPC client.

The client logs one ``btx.rpc.*`` event per call stage (call, request,
attempt, retry, outcome). Events go through the standard library root logger,
so applications that already configure ``logging`` keep control of handlers;
``configure_logging`` is a convenience for scripts and tests.

Output is human-readable console lines by default or one JSON object per line
with ``BTX_LOG_FORMAT=json``. ``BTX_LOG_LEVEL`` sets the threshold and
``BTX_SERVICE_NAME`` the ``service`` field bound to every line.

While a call is in flight its ``request_id`` and ``method`` are bound with
:func:`call_context`, so log lines emitted from handlers or transports during
that call carry them too.

Example:
    >>> configure_logging(log_format="json", log_level="DEBUG")
    >>> with call_context(request_id="btx-01HX...", method="getblockcount"):
    ...     get_logger("btx.app").info("btx.app.polled")
"""

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from pydantic import SecretStr
from structlog.typing import Processor

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"
DEFAULT_SERVICE_NAME = "btx"

ENV_LOG_FORMAT = "BTX_LOG_FORMAT"
ENV_LOG_LEVEL = "BTX_LOG_LEVEL"
ENV_SERVICE_NAME = "BTX_SERVICE_NAME"

REDACTED_PLACEHOLDER = "***REDACTED***"

# Matched case-insensitively against field names; covers wallet passphrases,
# rpcpassword/rpcauth values and private keys passed to import/dump methods
_SECRET_FIELD_MARKERS = frozenset(
    {"password", "passphrase", "token", "secret", "authorization", "auth", "privkey"}
)

_configured = False


def _is_secret_field(name: str) -> bool:
    lowered = name.lower()
    return any(marker in lowered for marker in _SECRET_FIELD_MARKERS)


def _redact(value: Any) -> Any:
    if isinstance(value, SecretStr):
        return REDACTED_PLACEHOLDER
    if isinstance(value, dict):
        return sanitize_for_logging(value)
    if isinstance(value, (list, tuple)):
        return [_redact(item) for item in value]
    return value


def sanitize_for_logging(data: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``data`` that is safe to log.

    Secret-looking field names and ``SecretStr`` values are replaced by
    ``REDACTED_PLACEHOLDER`` at any depth. The input is not modified.

    Example:
        >>> sanitize_for_logging({"wallet_name": "w1", "passphrase": "hunter2"})
        {'wallet_name': 'w1', 'passphrase': '***REDACTED***'}
    """
    return {
        key: REDACTED_PLACEHOLDER if _is_secret_field(key) else _redact(value)
        for key, value in data.items()
    }


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.plain_traceback,
    )


def _level(name: str) -> int:
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def configure_logging(
    log_format: str | None = None,
    log_level: str | None = None,
    service_name: str | None = None,
    force: bool = False,
) -> None:
    """Route structlog through a root handler writing to stdout.

    Arguments left as None fall back to the BTX_* environment variables and
    then to the module defaults. A second call is a no-op unless ``force``.

    Raises:
        ValueError: If the log level is not a standard level name
    """
    global _configured

    if _configured and not force:
        return

    log_format = (log_format or os.environ.get(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT)).lower()
    level = _level((log_level or os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper())
    service_name = service_name or os.environ.get(ENV_SERVICE_NAME, DEFAULT_SERVICE_NAME)

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    structlog.contextvars.bind_contextvars(service=service_name)
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """structlog logger for ``name``; applies the default setup on first use."""
    if not _configured:
        configure_logging()
    return structlog.stdlib.get_logger(name)


@contextmanager
def call_context(**fields: Any) -> Iterator[None]:
    """Bind ``fields`` to every log line emitted in this context until exit.

    Fields bound before entering are restored afterwards, so nested calls on
    the same thread do not leak into each other.
    """
    with structlog.contextvars.bound_contextvars(**fields):
        yield
