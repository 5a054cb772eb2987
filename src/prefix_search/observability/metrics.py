"""Prometheus metrics for index and match operations, mirrored to OpenTelemetry."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING, Any

from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader
from opentelemetry.sdk.resources import Resource
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


_meter_holder: dict[str, Any] = {"meter": None, "provider": None}


def init_metrics(
    service_name: str = "prefix-search",
    resource_attributes: dict[str, str] | None = None,
    metric_readers: list[MetricReader] | None = None,
) -> MeterProvider:
    """Initialize the OpenTelemetry meter used by the metric bridges."""
    provider = _meter_holder.get("provider")
    if isinstance(provider, MeterProvider):
        return provider

    attributes = {"service.name": service_name}
    if resource_attributes:
        attributes.update(resource_attributes)
    provider = MeterProvider(resource=Resource.create(attributes), metric_readers=metric_readers or [])
    _meter_holder["provider"] = provider
    _meter_holder["meter"] = provider.get_meter(__name__)
    return provider


def reset_metrics() -> None:
    """Drop the current meter provider; instruments are recreated lazily."""
    provider = _meter_holder.get("provider")
    if isinstance(provider, MeterProvider):
        provider.shutdown()
    _meter_holder.update({"meter": None, "provider": None})
    for bridge in _BRIDGES:
        bridge._otel_instrument = None
        bridge._last_values.clear()


def _get_meter():
    meter = _meter_holder.get("meter")
    if meter is None:
        init_metrics()
        meter = _meter_holder.get("meter")
    return meter


def _label_key(labels: dict[str, str]) -> tuple[tuple[str, str], ...]:
    return tuple(sorted(labels.items()))


class _BoundMetric:
    def __init__(self, wrapper: MetricBridge, labels: dict[str, str]) -> None:
        self._wrapper = wrapper
        self._labels = labels

    def inc(self, amount: float = 1.0) -> None:
        self._wrapper.inc(self._labels, amount)

    def observe(self, value: float) -> None:
        self._wrapper.observe(self._labels, value)

    def set(self, value: float) -> None:
        self._wrapper.set(self._labels, value)


class MetricBridge:
    """Bridge Prometheus metrics to OTel instruments."""

    def __init__(
        self,
        prom_metric: Counter | Histogram | Gauge,
        *,
        otel_name: str,
        otel_description: str,
        otel_kind: str,
    ) -> None:
        self._prom_metric = prom_metric
        self._otel_name = otel_name
        self._otel_description = otel_description
        self._otel_kind = otel_kind
        self._otel_instrument = None
        self._last_values: dict[tuple[tuple[str, str], ...], float] = {}

    def labels(self, **labels: str) -> _BoundMetric:
        return _BoundMetric(self, labels)

    def _ensure_otel_instrument(self):
        if self._otel_instrument is not None:
            return self._otel_instrument
        meter = _get_meter()
        if self._otel_kind == "counter":
            self._otel_instrument = meter.create_counter(self._otel_name, description=self._otel_description)
        elif self._otel_kind == "histogram":
            self._otel_instrument = meter.create_histogram(self._otel_name, description=self._otel_description)
        elif self._otel_kind == "gauge":
            self._otel_instrument = meter.create_up_down_counter(self._otel_name, description=self._otel_description)
        else:
            raise ValueError(f"Unknown metric kind: {self._otel_kind}")
        return self._otel_instrument

    def inc(self, labels: dict[str, str], amount: float) -> None:
        otel = self._ensure_otel_instrument()
        self._prom_metric.labels(**labels).inc(amount)
        otel.add(amount, labels)

    def observe(self, labels: dict[str, str], value: float) -> None:
        otel = self._ensure_otel_instrument()
        self._prom_metric.labels(**labels).observe(value)
        otel.record(value, labels)

    def set(self, labels: dict[str, str], value: float) -> None:
        otel = self._ensure_otel_instrument()
        self._prom_metric.labels(**labels).set(value)
        key = _label_key(labels)
        last = self._last_values.get(key, 0.0)
        delta = value - last
        if delta:
            otel.add(delta, labels)
        self._last_values[key] = value


_MATCH_LATENCY_PROM = Histogram(
    "prefix_search_match_latency_seconds",
    "Match latency in seconds",
    ["index", "mode"],
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5),
)

_MATCH_RESULTS_PROM = Histogram(
    "prefix_search_match_results",
    "Number of keys returned by a match",
    ["index", "mode"],
    buckets=(0, 1, 5, 10, 25, 50, 100, 500),
)

_INDEX_OPERATIONS_PROM = Counter(
    "prefix_search_index_operations_total",
    "Total add/remove/clear operations",
    ["index", "operation"],
)

_INDEXED_WORDS_PROM = Gauge(
    "prefix_search_indexed_words",
    "Normalized words currently in the collection",
    ["index"],
)

MATCH_LATENCY = MetricBridge(
    _MATCH_LATENCY_PROM,
    otel_name="prefix_search_match_latency_seconds",
    otel_description="Match latency in seconds",
    otel_kind="histogram",
)

MATCH_RESULTS = MetricBridge(
    _MATCH_RESULTS_PROM,
    otel_name="prefix_search_match_results",
    otel_description="Number of keys returned by a match",
    otel_kind="histogram",
)

INDEX_OPERATIONS = MetricBridge(
    _INDEX_OPERATIONS_PROM,
    otel_name="prefix_search_index_operations_total",
    otel_description="Total add/remove/clear operations",
    otel_kind="counter",
)

INDEXED_WORDS = MetricBridge(
    _INDEXED_WORDS_PROM,
    otel_name="prefix_search_indexed_words",
    otel_description="Normalized words currently in the collection",
    otel_kind="gauge",
)

_BRIDGES = (MATCH_LATENCY, MATCH_RESULTS, INDEX_OPERATIONS, INDEXED_WORDS)


@contextmanager
def track_latency(histogram: MetricBridge, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get content type for metrics exposition."""
    return CONTENT_TYPE_LATEST
