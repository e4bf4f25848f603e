"""
Structured Logging

Configures the ``shapecheck`` logger namespace to emit either JSON lines
or human-readable text. The library itself never installs handlers on
import; applications opt in by calling setup_logging() once.

Usage:
    from shapecheck.logging import setup_logging, get_logger
    setup_logging()
    logger = get_logger("matcher")
    logger.debug("Mismatch", extra={"reason": "Missing key 'a'", "path": "foo"})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from shapecheck.config import settings


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Include extra fields
        for key in ("reason", "path", "pattern_kind", "error", "error_type"):
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(level: str | None = None, fmt: str | None = None, stream=None):
    """Configure the shapecheck logger. Call once at app startup."""
    root = logging.getLogger("shapecheck")
    level = (level or settings.LOG_LEVEL).upper()
    root.setLevel(getattr(logging, level, logging.WARNING))

    # Clear existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    if (fmt or settings.LOG_FORMAT) == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root.addHandler(handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the shapecheck namespace."""
    return logging.getLogger(f"shapecheck.{name}")
