"""Per-context identifiers stamped onto log records.

Holds the active trace and span ids plus the name of the index being
worked on, so log lines from one ``add`` or ``match`` call can be joined
with its span.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING
from uuid import uuid4


if TYPE_CHECKING:
    from opentelemetry.trace import Span

search_context: ContextVar[dict | None] = ContextVar("search_context", default=None)


def get_trace_context() -> dict:
    """Current context, minting fresh trace and span ids when none are set."""
    ctx = search_context.get()
    if not ctx or not ctx.get("trace_id"):
        ctx = {"trace_id": uuid4().hex, "span_id": uuid4().hex[:16]}
        search_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **extra: object) -> None:
    search_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


def update_span_id(span_id: str) -> None:
    search_context.set({**(search_context.get() or {}), "span_id": span_id})


def bind_index(name: str) -> None:
    """Tag subsequent log records in this context with ``name``."""
    search_context.set({**get_trace_context(), "index": name})


def with_otel_span(span: Span) -> dict:
    ids = span.get_span_context()
    return {"trace_id": format(ids.trace_id, "032x"), "span_id": format(ids.span_id, "016x")}
