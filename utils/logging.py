"""
Logging Utility - Structured Logging

Provides centralized logging configuration for the probe.
Supports JSON format for log shippers and human-readable format for cron mail.

Usage:
    from utils.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Fetching data from API", extra={"url": url})
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import orjson

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through extra={...}
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return orjson.dumps(payload, default=str).decode("utf-8")


class _BelowLevelFilter(logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_logging(
    level: str = "INFO",
    format_type: str = "text",
    output: str = "stdout",
) -> None:
    """Configure application-wide logging.

    With output 'stdout', records below WARNING go to stdout and the rest
    to stderr, so failures always reach the error stream. With output
    'stderr' everything goes to stderr.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Log format ('json' or 'text')
        output: Log output ('stdout' or 'stderr')

    Raises:
        ValueError: If format_type or output is unknown
    """
    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    elif format_type == "text":
        formatter = logging.Formatter(TEXT_FORMAT)
    else:
        raise ValueError(f"Unknown log format: {format_type}")

    handlers: list[logging.Handler] = []

    if output == "stdout":
        out_handler = logging.StreamHandler(sys.stdout)
        out_handler.addFilter(_BelowLevelFilter(logging.WARNING))
        err_handler = logging.StreamHandler(sys.stderr)
        err_handler.setLevel(logging.WARNING)
        handlers.extend([out_handler, err_handler])
    elif output == "stderr":
        handlers.append(logging.StreamHandler(sys.stderr))
    else:
        raise ValueError(f"Unknown log output: {output}")

    root = logging.getLogger()

    # Replace only handlers installed by a previous call
    for handler in root.handlers[:]:
        if getattr(handler, "_probe_handler", False):
            root.removeHandler(handler)
            handler.close()

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._probe_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
