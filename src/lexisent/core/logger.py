from __future__ import annotations

import json
import logging
import os
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler

# Correlation ID shared by all records of one analysis session
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Record attributes copied into JSON output when present
_EXTRA_FIELDS = ("sentiment", "confidence", "word_count", "path", "error", "error_type")


def get_correlation_id() -> str:
    """Get the current correlation ID."""
    return _correlation_id.get()


def set_correlation_id(cid: Optional[str] = None) -> str:
    """Set a correlation ID for tracing one session.

    Args:
        cid: Correlation ID to set. If None, generates a new UUID.

    Returns:
        The correlation ID that was set.
    """
    if cid is None:
        cid = str(uuid.uuid4())[:8]
    _correlation_id.set(cid)
    return cid


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter for production use."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        cid = get_correlation_id()
        if cid:
            log_data["correlation_id"] = cid

        for key in _EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Set up logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: If True, use JSON structured format
        log_file: Optional file path to write logs to

    Examples:
        # Interactive use with rich console output
        setup_logging("DEBUG")

        # Machine-readable output
        setup_logging("INFO", json_output=True)
    """
    if os.getenv("LOG_JSON", "").lower() in ("1", "true", "yes"):
        json_output = True

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = []

    if json_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(StructuredFormatter())
    else:
        # stderr keeps stdout free for command output
        console_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))

    root.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        root.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name.

    Args:
        name: Logger name (e.g., "lexisent", "scorer", "history")

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class LogContext:
    """Context manager for adding fields to log records.

    Example:
        with LogContext(path="results.json"):
            log.info("Exporting history")  # Will include path
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._old_factory = None

    def __enter__(self) -> "LogContext":
        self._old_factory = logging.getLogRecordFactory()

        def record_factory(*args, **kwargs):
            record = self._old_factory(*args, **kwargs)
            for key, value in self.fields.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, *args) -> None:
        if self._old_factory:
            logging.setLogRecordFactory(self._old_factory)


def log_analysis_event(
    logger: logging.Logger,
    sentiment: str,
    confidence: float,
    word_count: int,
    **kwargs: Any,
) -> None:
    """Log a completed analysis with standard fields.

    Args:
        logger: Logger instance
        sentiment: Label of the result
        confidence: Confidence of the result
        word_count: Number of tokens analyzed
        **kwargs: Additional fields rendered into the message
    """
    if not logger.isEnabledFor(logging.INFO):
        return

    extra = {"sentiment": sentiment, "confidence": confidence, "word_count": word_count}
    extra.update(kwargs)

    parts = [f"[{sentiment.upper()}]", f"confidence={confidence:.3f}", f"words={word_count}"]
    for key, value in kwargs.items():
        if value is not None:
            parts.append(f"{key}={value}")

    record = logger.makeRecord(
        logger.name,
        logging.INFO,
        "(analysis)",
        0,
        " ".join(parts),
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)

    logger.handle(record)


def log_error_with_context(
    logger: logging.Logger,
    message: str,
    error: Exception,
    **context: Any,
) -> None:
    """Log an error with additional context.

    Args:
        logger: Logger instance
        message: Error message
        error: Exception that occurred
        **context: Additional context fields
    """
    extra = {"error": str(error), "error_type": type(error).__name__}
    extra.update(context)

    record = logger.makeRecord(
        logger.name,
        logging.ERROR,
        "(error)",
        0,
        f"{message}: {error}",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)

    logger.handle(record)
