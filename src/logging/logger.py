# src/logging/logger.py - v1
"""Formatters and one-call setup for the ``osintgraph`` logger tree.

Records carry the active project and command from logging.context.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from osintgraph.logging.context import get_context

ROOT_LOGGER = "osintgraph"


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            entry["context"] = context

        # logger.info("...", extra={"data": {...}})
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """``time [LEVEL] logger [project] (command) - message`` for terminals."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        line = (
            f"{_timestamp(record):%Y-%m-%d %H:%M:%S} "
            f"[{record.levelname:8s}] {record.name}"
        )
        if ctx.project:
            line += f" [{ctx.project}]"
        if ctx.command:
            line += f" ({ctx.command})"
        line += f" - {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": JsonFormatter,
    "text": TextFormatter,
}


def get_logger(name: str) -> logging.Logger:
    """Logger under the osintgraph namespace, e.g. ``get_logger("cli")``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> logging.Logger:
    """(Re)configure the osintgraph logger and return it.

    Calling again replaces the previous handlers.

    Args:
        level: DEBUG, INFO, WARNING or ERROR.
        log_format: "json" or "text"; anything else falls back to text.
        log_file: Optional log file, written in addition to stderr.
        rotation: File size that triggers rotation (e.g. "10MB").
        retention: Rotated files to keep.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    formatter = _FORMATTERS.get(log_format, TextFormatter)()

    # stdout is reserved for CLI output
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        from osintgraph.logging.handlers import create_rotating_handler

        file_handler = create_rotating_handler(log_file, rotation, retention)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root
