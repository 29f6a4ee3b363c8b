"""Structured JSON logging for the lexifeed services.

Every module logs through a child of the ``lexifeed`` logger. Records are
rendered as one JSON object per line; request-scoped values bound with
:func:`log_context` (the API binds ``request_id``) are copied onto each
record emitted while the context is active.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
LOG_DIR = Path(os.environ.get("LEXIFEED_LOG_DIR") or PROJECT_ROOT / "log")
LOG_FILE = LOG_DIR / "lexifeed.log"
LOGGER_NAME = "lexifeed"
DEFAULT_LOG_LEVEL = logging.INFO

# Attributes present on every LogRecord; anything else arrived via ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

_context: contextvars.ContextVar[Mapping[str, object]] = contextvars.ContextVar(
    "lexifeed_log_context", default={}
)
_logger: Optional[logging.Logger] = None


class JSONLogFormatter(logging.Formatter):
    """Render records as JSON with well-known fields promoted to the top level."""

    TOP_LEVEL_FIELDS: tuple[str, ...] = ("request_id", "event", "provider", "duration_ms", "status")

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra: Dict[str, object] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRIBUTES:
                continue
            if key in self.TOP_LEVEL_FIELDS:
                if value is not None:
                    payload[key] = value
            else:
                extra[key] = value
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class LogContextFilter(logging.Filter):
    """Copy the active :func:`log_context` values onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        for key, value in _context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def setup_logging(log_level: int = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Attach the JSON stream and rotating file handlers to the package logger."""

    global _logger
    if _logger is not None:
        configure_logging_level(log_level=log_level)
        return _logger

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    formatter = JSONLogFormatter()
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False
    for handler in (
        logging.StreamHandler(),
        RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3),
    ):
        # Handler-level so records from child loggers are enriched too.
        handler.addFilter(LogContextFilter())
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _logger = logger
    configure_logging_level(log_level=log_level)
    return logger


def get_logger() -> logging.Logger:
    """Return the package logger, configuring it on first use."""

    return _logger if _logger is not None else setup_logging()


def configure_logging_level(debug_enabled: bool = False, log_level: Optional[int] = None) -> int:
    """Apply ``log_level``, or DEBUG/INFO from ``debug_enabled``, to the logger and handlers."""

    level = log_level if log_level is not None else (logging.DEBUG if debug_enabled else DEFAULT_LOG_LEVEL)
    logger = get_logger()
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
    return level


@contextlib.contextmanager
def log_context(**values: object) -> Iterator[Mapping[str, object]]:
    """Bind ``values`` to every record logged inside the ``with`` block."""

    merged = {**_context.get(), **{key: value for key, value in values.items() if value is not None}}
    token = _context.set(merged)
    try:
        yield merged
    finally:
        _context.reset(token)


__all__ = [
    "JSONLogFormatter",
    "LogContextFilter",
    "configure_logging_level",
    "get_logger",
    "log_context",
    "setup_logging",
]
