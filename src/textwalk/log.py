"""
Logging utilities for TextWalk.

The library only emits records through module-level loggers; handlers are
installed by the CLI (or by the embedding application) via configure_logging.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

PACKAGE_LOGGER = "textwalk"

# Extra fields copied into log lines when present on a record
CONTEXT_FIELDS = ("method", "mode", "dimensions", "expected_dimensions", "seed")


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log line.

    Each line includes level, logger, message, an optional timestamp and
    any context fields passed via the 'extra' parameter.
    """

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_timestamp:
            log_entry["timestamp"] = datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat()

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Formatter for terminals.

    Format: TIMESTAMP - LOGGER - LEVEL - MESSAGE [method=X mode=Y]
    """

    def __init__(self, include_timestamp: bool = True):
        if include_timestamp:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            fmt = "%(name)s - %(levelname)s - %(message)s"
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        context_parts = []
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                context_parts.append(f"{field}={value}")

        if context_parts:
            return f"{base} [{' '.join(context_parts)}]"
        return base


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Optional logging level override
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def configure_logging(
    level: int = logging.INFO,
    include_timestamp: bool = True,
    structured: bool = False,
) -> None:
    """
    Attach a stderr handler to the textwalk package logger.

    Stdout is left to the CLI's JSON output. Calling this twice does not
    add a second handler; the level is still updated.

    Args:
        level: Logging level (default: INFO)
        include_timestamp: Whether to include timestamps
        structured: JSON lines if True, human-readable otherwise
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        if structured:
            formatter = StructuredFormatter(include_timestamp=include_timestamp)
        else:
            formatter = HumanReadableFormatter(include_timestamp=include_timestamp)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    for handler in package_logger.handlers:
        handler.setLevel(level)
