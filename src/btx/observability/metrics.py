"""btx RPC metrics collection.

Prometheus-compatible counters and histograms fed by the ``metrics_handler``
telemetry handler (see btx.rpc.telemetry).

Example:
    >>> from btx.observability.metrics import MetricsCollector
    >>> collector = MetricsCollector()
    >>> collector.increment_counter("btx_rpc_calls_total", {"method": "getblockcount"})
    >>> print(collector.export_prometheus())
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import ClassVar

LabelKey = tuple[tuple[str, str], ...]

# Latency buckets (seconds) sized for a local or LAN daemon
DEFAULT_LATENCY_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)


def _label_key(labels: dict[str, str] | None) -> LabelKey:
    return tuple(sorted((labels or {}).items()))


@dataclass
class Counter:
    """A monotonically increasing counter metric."""

    name: str
    help_text: str
    values: dict[LabelKey, float] = field(default_factory=dict)

    def increment(self, labels: dict[str, str] | None = None, value: float = 1.0) -> None:
        key = _label_key(labels)
        self.values[key] = self.values.get(key, 0.0) + value

    def get(self, labels: dict[str, str] | None = None) -> float:
        return self.values.get(_label_key(labels), 0.0)


@dataclass
class HistogramSeries:
    bucket_counts: list[float]
    total: float = 0.0
    count: float = 0.0


@dataclass
class Histogram:
    """A histogram metric with cumulative export."""

    name: str
    help_text: str
    buckets: tuple[float, ...] = DEFAULT_LATENCY_BUCKETS
    values: dict[LabelKey, HistogramSeries] = field(default_factory=dict)

    def observe(self, value: float, labels: dict[str, str] | None = None) -> None:
        key = _label_key(labels)
        series = self.values.get(key)
        if series is None:
            series = self.values[key] = HistogramSeries(bucket_counts=[0.0] * len(self.buckets))
        for index, bound in enumerate(self.buckets):
            if value <= bound:
                series.bucket_counts[index] += 1.0
                break
        series.total += value
        series.count += 1.0

    def get_count(self, labels: dict[str, str] | None = None) -> float:
        series = self.values.get(_label_key(labels))
        return series.count if series is not None else 0.0


class MetricsCollector:
    """Thread-safe collection of the btx RPC metrics.

    The collector is an ordinary object: create one, register
    ``metrics_handler(collector)`` on a client, and export it wherever the
    application serves metrics.
    """

    DEFAULT_COUNTERS: ClassVar[dict[str, str]] = {
        "btx_rpc_calls_total": "Total number of JSON-RPC calls by method and status",
        "btx_rpc_errors_total": "Total number of failed JSON-RPC calls by reason",
        "btx_rpc_retries_total": "Total number of JSON-RPC retry attempts",
        "btx_rpc_exceptions_total": "Total number of calls aborted by an unexpected exception",
    }

    DEFAULT_HISTOGRAMS: ClassVar[dict[str, str]] = {
        "btx_rpc_call_duration_seconds": "JSON-RPC call duration in seconds, retries included",
    }

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters = {
            name: Counter(name=name, help_text=help_text)
            for name, help_text in self.DEFAULT_COUNTERS.items()
        }
        self._histograms = {
            name: Histogram(name=name, help_text=help_text)
            for name, help_text in self.DEFAULT_HISTOGRAMS.items()
        }

    def increment_counter(
        self, name: str, labels: dict[str, str] | None = None, value: float = 1.0
    ) -> None:
        with self._lock:
            if name in self._counters:
                self._counters[name].increment(labels, value)

    def observe_histogram(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        with self._lock:
            if name in self._histograms:
                self._histograms[name].observe(value, labels)

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> float:
        with self._lock:
            counter = self._counters.get(name)
            return counter.get(labels) if counter is not None else 0.0

    def get_histogram_count(self, name: str, labels: dict[str, str] | None = None) -> float:
        with self._lock:
            histogram = self._histograms.get(name)
            return histogram.get_count(labels) if histogram is not None else 0.0

    @staticmethod
    def _format_labels(labels: LabelKey, extra: str = "") -> str:
        parts = [
            '{}="{}"'.format(k, v.replace("\\", "\\\\").replace('"', '\\"')) for k, v in labels
        ]
        if extra:
            parts.append(extra)
        return "{" + ",".join(parts) + "}" if parts else ""

    def export_prometheus(self) -> str:
        """Export all metrics in Prometheus text exposition format."""
        lines: list[str] = []
        with self._lock:
            for counter in self._counters.values():
                lines.append(f"# HELP {counter.name} {counter.help_text}")
                lines.append(f"# TYPE {counter.name} counter")
                if not counter.values:
                    lines.append(f"{counter.name} 0")
                for key, value in counter.values.items():
                    lines.append(f"{counter.name}{self._format_labels(key)} {value}")

            for histogram in self._histograms.values():
                lines.append(f"# HELP {histogram.name} {histogram.help_text}")
                lines.append(f"# TYPE {histogram.name} histogram")
                for key, series in histogram.values.items():
                    cumulative = 0.0
                    for bound, bucket_count in zip(histogram.buckets, series.bucket_counts):
                        cumulative += bucket_count
                        labels = self._format_labels(key, f'le="{bound}"')
                        lines.append(f"{histogram.name}_bucket{labels} {cumulative}")
                    labels = self._format_labels(key, 'le="+Inf"')
                    lines.append(f"{histogram.name}_bucket{labels} {series.count}")
                    lines.append(f"{histogram.name}_sum{self._format_labels(key)} {series.total}")
                    lines.append(f"{histogram.name}_count{self._format_labels(key)} {series.count}")

        return "\n".join(lines) + "\n"

    def reset(self) -> None:
        """Reset all metrics to zero. Useful for testing."""
        with self._lock:
            for counter in self._counters.values():
                counter.values.clear()
            for histogram in self._histograms.values():
                histogram.values.clear()
