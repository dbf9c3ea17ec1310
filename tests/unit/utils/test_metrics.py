"""Unit tests for the converter metrics registry."""

from src.utils.metrics import MetricsRegistry


def test_counter_is_shared_per_name_and_labels():
    registry = MetricsRegistry()

    registry.counter("attempts", "help", {"outcome": "timeout"}).inc()
    registry.counter("attempts", "help", {"outcome": "timeout"}).inc()
    registry.counter("attempts", "help", {"outcome": "success"}).inc()

    assert registry.counter("attempts", "help", {"outcome": "timeout"}).get() == 2
    assert registry.counter("attempts", "help", {"outcome": "success"}).get() == 1


def test_export_prometheus_writes_one_header_per_metric():
    registry = MetricsRegistry()
    registry.counter("attempts", "Conversion attempts", {"outcome": "a"}).inc()
    registry.counter("attempts", "Conversion attempts", {"outcome": "b"}).inc(3)
    registry.histogram("latency", "Latency", buckets=[0.1, 1.0]).observe(0.5)

    text = registry.export_prometheus()

    assert text.count("# TYPE attempts counter") == 1
    assert 'attempts{outcome="b"} 3.0' in text
    assert 'latency_bucket{le="0.1"} 0' in text
    assert 'latency_bucket{le="1.0"} 1' in text
    assert "latency_count 1" in text


def test_reset_zeroes_values():
    registry = MetricsRegistry()
    attempts = registry.counter("attempts", "help")
    latency = registry.histogram("latency", "help")
    attempts.inc(5)
    latency.observe(0.2)

    registry.reset()

    assert attempts.get() == 0
    assert latency.count == 0
    assert latency.sum == 0.0
