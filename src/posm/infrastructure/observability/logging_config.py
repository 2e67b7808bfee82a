from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from opentelemetry import trace

from posm.api.middleware.request_id import get_request_id
from posm.config import get_settings

_LOGGING_CONFIGURED = False

_EXTRA_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "entity",
    "entity_id",
    "menu_id",
    "recipe_id",
    "order",
    "tables",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s%(context)s"


def _trace_fields() -> tuple[str | None, str | None]:
    span = trace.get_current_span()
    span_context = span.get_span_context()
    if not span_context.is_valid:
        return None, None
    return (
        format(span_context.trace_id, "032x"),
        format(span_context.span_id, "016x"),
    )


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    extras: dict[str, Any] = {}
    for key in _EXTRA_FIELDS:
        value = getattr(record, key, None)
        if value is not None:
            extras[key] = value
    return extras


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        trace_id, span_id = _trace_fields()
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": get_request_id(),
            "trace_id": trace_id,
            "span_id": span_id,
        }
        payload.update(_extras(record))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Human readable lines for development; structured extras are appended as key=value."""

    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        fields = _extras(record)
        request_id = get_request_id()
        if request_id:
            fields["request_id"] = request_id
        record.context = "".join(f" {key}={value}" for key, value in fields.items())
        return super().format(record)


def configure_logging() -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    settings = get_settings()
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if settings.is_production else TextFormatter())
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level)

    _LOGGING_CONFIGURED = True
