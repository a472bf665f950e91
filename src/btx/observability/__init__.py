"""Observability module for btx.

Structured logging (structlog) and Prometheus-compatible metrics for the
JSON-RPC dispatcher.

Example:
    >>> from btx.observability import get_logger, MetricsCollector
    >>> from btx.rpc.telemetry import metrics_handler
    >>>
    >>> collector = MetricsCollector()
    >>> handler = metrics_handler(collector)  # register on ClientConfig.handlers
"""

from btx.observability.logging import (
    call_context,
    configure_logging,
    get_logger,
    sanitize_for_logging,
)
from btx.observability.metrics import MetricsCollector

__all__ = [
    "call_context",
    "configure_logging",
    "get_logger",
    "MetricsCollector",
    "sanitize_for_logging",
]
