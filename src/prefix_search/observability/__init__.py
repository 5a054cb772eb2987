"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from prefix_search.observability.context import bind_index, get_trace_context, search_context, set_trace_context
from prefix_search.observability.logging import JsonFormatter, configure_logging
from prefix_search.observability.metrics import (
    INDEX_OPERATIONS,
    INDEXED_WORDS,
    MATCH_LATENCY,
    MATCH_RESULTS,
    get_metrics,
    get_metrics_content_type,
    init_metrics,
    reset_metrics,
    track_latency,
)
from prefix_search.observability.tracing import create_span, get_tracer, init_tracing, use_global_tracer


__all__ = [
    "INDEXED_WORDS",
    "INDEX_OPERATIONS",
    "MATCH_LATENCY",
    "MATCH_RESULTS",
    "JsonFormatter",
    "bind_index",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "reset_metrics",
    "search_context",
    "set_trace_context",
    "track_latency",
    "use_global_tracer",
]
