"""JSON log lines carrying the trace ids and index name of the current call."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
import sys
from typing import Any

import orjson

from prefix_search.observability.context import get_trace_context


_RESERVED_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}
_PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _level(name: str, fallback: int) -> int:
    return getattr(logging, name.upper(), fallback)


class JsonFormatter(logging.Formatter):
    """One orjson-encoded object per record.

    Fields passed through ``extra`` are copied onto the object, redacted when
    their name looks like a credential and clipped when long. Query texts can
    be arbitrarily large, so messages are clipped too.
    """

    REDACT_KEYS = frozenset({"password", "token", "api_key", "secret", "authorization"})
    MAX_MESSAGE_LEN = 2000
    MAX_EXTRA_LEN = 500

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_trace_context()
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._clip(record.getMessage(), self.MAX_MESSAGE_LEN),
            "trace_id": ctx.get("trace_id", ""),
            "span_id": ctx.get("span_id", ""),
        }
        # prefix_search.engine -> engine
        _, dot, component = record.name.rpartition(".")
        if dot:
            entry["component"] = component
        if ctx.get("index"):
            entry["index"] = ctx["index"]
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            if key.lower() in self.REDACT_KEYS:
                entry[key] = "[REDACTED]"
            elif isinstance(value, str):
                entry[key] = self._clip(value, self.MAX_EXTRA_LEN)
            else:
                entry[key] = value

        return orjson.dumps(entry, default=self._json_default).decode("utf-8")

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        return text if len(text) <= limit else text[:limit] + "..."

    def _json_default(self, value: Any) -> Any:
        if isinstance(value, (set, frozenset)):
            try:
                return sorted(value)
            except TypeError:
                return list(value)
        if isinstance(value, (bytes, bytearray)):
            return value.decode("utf-8", errors="replace")
        if isinstance(value, (Path, Exception)):
            return str(value)
        return repr(value)


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    *,
    logger_levels: dict[str, str] | None = None,
    trace_categories: list[str] | None = None,
    trace_level: str = "debug",
) -> None:
    """Install a single stdout handler on the root logger.

    ``trace_categories`` names loggers to open up to ``trace_level``, e.g.
    ``["prefix_search.search"]`` to see key bookkeeping in the collection.
    ``logger_levels`` is applied last and wins over it.
    """
    root = logging.getLogger()
    root.setLevel(_level(level, logging.INFO))
    for existing in root.handlers[:]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(_PLAIN_FORMAT))
    root.addHandler(handler)

    for name in trace_categories or []:
        logging.getLogger(name).setLevel(_level(trace_level, logging.DEBUG))
    for name, name_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(_level(name_level, logging.INFO))
