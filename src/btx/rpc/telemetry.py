"""Call lifecycle events.

Handlers are plain callables registered on the client configuration
(``ClientConfig.handlers``); the dispatcher invokes them directly. There is no
process-wide event bus.

Events emitted per call:

    start      measurements: system_time (ns)      metadata: call metadata
    retry      measurements: delay (s)             metadata: + attempt, reason
    stop       measurements: duration (s)          metadata: + status, result | reason
    exception  measurements: duration (s)          metadata: + kind, reason, stacktrace

Call metadata is ``client``, ``method``, ``method_object``, ``id`` and ``path``.
``exception`` is only emitted when the call path raised outside the classified
error flow; the exception is re-raised afterwards.

A handler that raises is logged and skipped: telemetry never changes the
outcome of a call.
"""

from __future__ import annotations

import time
import traceback
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from btx.errors import MethodError, TransportError
from btx.observability.logging import get_logger
from btx.observability.metrics import MetricsCollector

logger = get_logger(__name__)

T = TypeVar("T")


class EventName(str, Enum):
    START = "start"
    STOP = "stop"
    EXCEPTION = "exception"
    RETRY = "retry"


EVENT_PREFIX = ("btx", "rpc", "call")


@dataclass(frozen=True)
class CallEvent:
    """A single telemetry event."""

    name: EventName
    measurements: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> tuple[str, ...]:
        """Fully qualified event name, e.g. ``("btx", "rpc", "call", "stop")``."""
        return (*EVENT_PREFIX, self.name.value)


Handler = Callable[[CallEvent], None]


class Telemetry:
    """Dispatches events to a fixed set of handlers."""

    def __init__(self, handlers: Iterable[Handler] = ()) -> None:
        self._handlers = tuple(handlers)

    def emit(
        self,
        name: EventName,
        measurements: Mapping[str, Any],
        metadata: Mapping[str, Any],
    ) -> None:
        if not self._handlers:
            return
        event = CallEvent(name=name, measurements=dict(measurements), metadata=dict(metadata))
        for handler in self._handlers:
            try:
                handler(event)
            except Exception as e:
                logger.warning(
                    "btx.telemetry.handler_failed",
                    event=name.value,
                    handler=getattr(handler, "__qualname__", repr(handler)),
                    error=str(e),
                    error_type=type(e).__name__,
                )

    def span(
        self,
        metadata: Mapping[str, Any],
        fn: Callable[[], tuple[T, Mapping[str, Any]]],
    ) -> T:
        """Run ``fn`` between a start and a stop (or exception) event.

        ``fn`` returns the value and the extra metadata for the stop event.
        """
        self.emit(EventName.START, {"system_time": time.time_ns()}, metadata)
        started = time.perf_counter()
        try:
            value, stop_metadata = fn()
        except BaseException as exc:
            self.emit(
                EventName.EXCEPTION,
                {"duration": time.perf_counter() - started},
                {
                    **metadata,
                    "kind": "error" if isinstance(exc, Exception) else "exit",
                    "reason": exc,
                    "stacktrace": traceback.format_tb(exc.__traceback__),
                },
            )
            raise
        self.emit(
            EventName.STOP,
            {"duration": time.perf_counter() - started},
            {**metadata, **stop_metadata},
        )
        return value


def metrics_handler(collector: MetricsCollector) -> Handler:
    """Build a handler that records call metrics into ``collector``."""

    def handle(event: CallEvent) -> None:
        method = str(event.metadata.get("method", ""))
        if event.name is EventName.STOP:
            status = str(event.metadata.get("status", ""))
            collector.increment_counter(
                "btx_rpc_calls_total", {"method": method, "status": status}
            )
            reason = event.metadata.get("reason")
            if isinstance(reason, (MethodError, TransportError)):
                collector.increment_counter(
                    "btx_rpc_errors_total", {"reason": reason.reason.value}
                )
            collector.observe_histogram(
                "btx_rpc_call_duration_seconds",
                event.measurements["duration"],
                {"method": method},
            )
        elif event.name is EventName.RETRY:
            collector.increment_counter("btx_rpc_retries_total", {"method": method})
        elif event.name is EventName.EXCEPTION:
            collector.increment_counter("btx_rpc_exceptions_total", {"method": method})

    return handle
