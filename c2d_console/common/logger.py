"""
C2D Console — Structured JSON Logger

Every log entry is a single-line JSON object with:
  - timestamp (ISO 8601)
  - level
  - module
  - message
  - optional context fields (device_id, method, status, etc.)

Records go to stderr; stdout belongs to the interactive console.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any


class StructuredJsonFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        # Merge any extra context attached to the record
        if hasattr(record, "context") and isinstance(record.context, dict):
            log_entry["context"] = record.context

        if record.exc_info and record.exc_info[1]:
            log_entry["traceback"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """
    Return a logger configured with structured JSON output.

    Usage:
        from c2d_console.common.logger import get_logger
        logger = get_logger(__name__)
        logger.info("Method invoked", extra={"context": {"method": "GraphTopologySet"}})
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(StructuredJsonFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    if level is not None:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def set_level(level: str) -> None:
    """Apply ``level`` to every logger under the ``c2d_console`` namespace."""
    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.getLogger("c2d_console").setLevel(resolved)
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith("c2d_console") and isinstance(logger, logging.Logger):
            logger.setLevel(resolved)
