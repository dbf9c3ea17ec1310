"""
Converter Metrics - Prometheus-compatible metrics collection.

This module provides lightweight metrics collection for the dialect converter.
The converter never raises for conversion-service problems and falls back to
the original SQL instead, so these counters are how an outage shows up.

Metrics Types:
- Counter: Monotonically increasing values (requests, attempts, fallbacks)
- Histogram: Distribution of values (conversion latency)
"""

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class CounterMetric:
    """Counter metric - monotonically increasing value."""

    name: str
    help: str
    value: float = 0.0
    labels: Dict[str, str] = field(default_factory=dict)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def inc(self, amount: float = 1.0):
        """Increment counter by amount."""
        with self._lock:
            self.value += amount

    def get(self) -> float:
        """Get current value."""
        return self.value

    def reset(self):
        """Reset counter to zero."""
        with self._lock:
            self.value = 0.0


@dataclass
class HistogramMetric:
    """Histogram metric - distribution of values."""

    name: str
    help: str
    buckets: List[float] = field(
        default_factory=lambda: [0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
    )
    labels: Dict[str, str] = field(default_factory=dict)

    sum: float = 0.0
    count: int = 0
    bucket_counts: Dict[float, int] = field(default_factory=dict)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def __post_init__(self):
        for bucket in self.buckets:
            self.bucket_counts[bucket] = 0

    def observe(self, value: float):
        """Observe a value."""
        with self._lock:
            self.sum += value
            self.count += 1
            for bucket in self.buckets:
                if value <= bucket:
                    self.bucket_counts[bucket] += 1

    def reset(self):
        with self._lock:
            self.sum = 0.0
            self.count = 0
            for bucket in self.buckets:
                self.bucket_counts[bucket] = 0


class MetricsRegistry:
    """
    Central registry for all metrics.

    Thread-safe metrics collection with Prometheus-compatible export.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._counters: Dict[str, CounterMetric] = {}
        self._histograms: Dict[str, HistogramMetric] = {}

    def counter(
        self, name: str, help: str, labels: Optional[Dict[str, str]] = None
    ) -> CounterMetric:
        """Get or create a counter metric keyed by name and labels."""
        key = self._make_key(name, labels)

        with self._lock:
            if key not in self._counters:
                self._counters[key] = CounterMetric(
                    name=name, help=help, labels=labels or {}
                )
            return self._counters[key]

    def histogram(
        self,
        name: str,
        help: str,
        buckets: Optional[List[float]] = None,
        labels: Optional[Dict[str, str]] = None,
    ) -> HistogramMetric:
        """Get or create a histogram metric."""
        key = self._make_key(name, labels)

        with self._lock:
            if key not in self._histograms:
                if buckets:
                    hist = HistogramMetric(
                        name=name, help=help, buckets=buckets, labels=labels or {}
                    )
                else:
                    hist = HistogramMetric(name=name, help=help, labels=labels or {})
                self._histograms[key] = hist
            return self._histograms[key]

    def _make_key(self, name: str, labels: Optional[Dict[str, str]]) -> str:
        """Create unique key for metric with labels."""
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"

    def export_prometheus(self) -> str:
        """
        Export all metrics in Prometheus text format.

        Returns:
            String in Prometheus exposition format
        """
        lines = []
        seen_headers = set()

        with self._lock:
            for counter in self._counters.values():
                if counter.name not in seen_headers:
                    lines.append(f"# HELP {counter.name} {counter.help}")
                    lines.append(f"# TYPE {counter.name} counter")
                    seen_headers.add(counter.name)
                label_str = self._format_labels(counter.labels)
                lines.append(f"{counter.name}{label_str} {counter.value}")

            for hist in self._histograms.values():
                if hist.name not in seen_headers:
                    lines.append(f"# HELP {hist.name} {hist.help}")
                    lines.append(f"# TYPE {hist.name} histogram")
                    seen_headers.add(hist.name)
                label_str = self._format_labels(hist.labels)

                for bucket, count in sorted(hist.bucket_counts.items()):
                    bucket_label = self._format_labels(
                        {**hist.labels, "le": str(bucket)}
                    )
                    lines.append(f"{hist.name}_bucket{bucket_label} {count}")

                inf_label = self._format_labels({**hist.labels, "le": "+Inf"})
                lines.append(f"{hist.name}_bucket{inf_label} {hist.count}")

                lines.append(f"{hist.name}_sum{label_str} {hist.sum}")
                lines.append(f"{hist.name}_count{label_str} {hist.count}")

        return "\n".join(lines) + "\n"

    def _format_labels(self, labels: Dict[str, str]) -> str:
        """Format labels for Prometheus."""
        if not labels:
            return ""
        label_pairs = [f'{k}="{v}"' for k, v in sorted(labels.items())]
        return "{" + ",".join(label_pairs) + "}"

    def reset(self):
        """Reset all metrics to initial state."""
        with self._lock:
            for counter in self._counters.values():
                counter.reset()
            for hist in self._histograms.values():
                hist.reset()


# Global registry instance
_global_registry = MetricsRegistry()


def get_registry() -> MetricsRegistry:
    """Get the global metrics registry."""
    return _global_registry


def counter(
    name: str, help: str, labels: Optional[Dict[str, str]] = None
) -> CounterMetric:
    """Get or create a counter from global registry."""
    return _global_registry.counter(name, help, labels)


def histogram(
    name: str,
    help: str,
    buckets: Optional[List[float]] = None,
    labels: Optional[Dict[str, str]] = None,
) -> HistogramMetric:
    """Get or create a histogram from global registry."""
    return _global_registry.histogram(name, help, buckets, labels)


# Dialect Converter Metrics

CONVERSION_LATENCY_SECONDS = histogram(
    "dialect_conversion_duration_seconds",
    "Time taken by a convert_sql call including all endpoint attempts",
)


def record_conversion(mode: str, outcome: str) -> None:
    """Count a finished conversion by endpoint mode and outcome."""
    counter(
        "dialect_conversion_total",
        "Total number of convert_sql calls",
        labels={"mode": mode, "outcome": outcome},
    ).inc()


def record_call(outcome: str) -> None:
    """Count a conversion service call by why it did or did not succeed."""
    counter(
        "dialect_conversion_call_total",
        "Total number of conversion service calls by outcome",
        labels={"outcome": outcome},
    ).inc()


def record_attempt(endpoint: str, outcome: str) -> None:
    """Count a dispatch attempt against the override URL or one pool entry.

    endpoint is "override" or a configured host:port, never a free-form URL.
    """
    counter(
        "dialect_conversion_attempt_total",
        "Total number of dispatch attempts per configured endpoint",
        labels={"endpoint": endpoint, "outcome": outcome},
    ).inc()
