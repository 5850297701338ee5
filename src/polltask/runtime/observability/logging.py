"""Logging setup for the ``polltask`` logger hierarchy.

Every module logs through ``logging.getLogger("polltask.<area>")``. Adapters
log state transitions at DEBUG, protocol violations at ERROR or WARNING.
Nothing is emitted until configure_logging() attaches a handler.

Quick Start:
    >>> from polltask.runtime.observability import configure_logging
    >>> configure_logging(level="DEBUG")            # human readable on stderr
    >>> configure_logging(format="json")            # JSON lines, level from settings
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TextIO

from polltask.foundation.config import get_settings

ROOT_LOGGER = "polltask"

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """JSON Lines formatter for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        import orjson
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(entry).decode()


def configure_logging(
    format: str | None = None,  # noqa: A002 - matches settings field
    level: str | None = None,
    *,
    output: TextIO | None = None,
) -> logging.Logger:
    """Attach a single handler to the polltask logger.

    Missing arguments fall back to POLLTASK_LOG_FORMAT / POLLTASK_LOG_LEVEL.
    Calling it again replaces the previous handler.
    """
    settings = get_settings().logging
    format = format or settings.format
    level = (level or settings.level).upper()

    handler = logging.StreamHandler(output or sys.stderr)
    match format:
        case "text": handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
        case "json": handler.setFormatter(JsonFormatter())
        case _: raise ValueError(f"Unknown format: {format}. Use 'text' or 'json'")

    root = logging.getLogger(ROOT_LOGGER)
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.WARNING))
    root.propagate = False
    return root


def get_logger(area: str) -> logging.Logger:
    """Logger for one area of the library, e.g. get_logger("sink")."""
    return logging.getLogger(f"{ROOT_LOGGER}.{area}")
