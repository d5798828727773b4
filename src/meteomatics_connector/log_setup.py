"""Logging setup for connector and command-line execution."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from .redaction import sanitize_text

# Query context the client attaches through ``extra=``.
CONTEXT_FIELDS = ("url", "status", "record_count", "session_id")

# httpx logs every request line at INFO; the client already logs its own.
QUIET_LOGGERS = ("httpx", "httpcore")


class JsonConsoleFormatter(logging.Formatter):
    """JSON formatter for structured console logs."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                event[field] = value if isinstance(value, int) else sanitize_text(str(value))
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str)


def setup_logger(
    name: str = "meteomatics_connector", level: int = logging.INFO
) -> logging.Logger:
    """Create and configure a process-wide logger."""
    for quiet in QUIET_LOGGERS:
        logging.getLogger(quiet).setLevel(max(level, logging.WARNING))

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonConsoleFormatter())
    logger.addHandler(handler)
    return logger
