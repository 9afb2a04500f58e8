"""Structured JSON logging for the resource_import logger tree."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Optional

LOGGER_NAME = "resource_import"

# Set via ``extra=`` by the transport, collector and generators
_EXTRA_FIELDS = (
    "service", "resource_type", "resources", "pages", "attempt", "duration_s",
)


class JsonFormatter(logging.Formatter):
    """Emit one JSON object per log line, stamped with the record's own time."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> None:
    """Route the resource_import loggers to one JSON handler (stderr by default).

    Records stop at the package logger; the root logger is left alone so the
    JSON lines never interleave with another handler's output.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter())
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.propagate = False
