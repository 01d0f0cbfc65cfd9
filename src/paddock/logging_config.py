"""Structured logging configuration for Paddock.

Configurable via environment variables (the ``PADDOCK_`` prefixed name wins
when both are set):
- PADDOCK_LOG_LEVEL / LOG_LEVEL: DEBUG, INFO, WARNING, ERROR. Default: INFO
- PADDOCK_LOG_FORMAT / LOG_FORMAT: 'text' or 'json'. Default: text

The engine itself never configures logging; it only emits records under the
``paddock`` namespace. Hosts call :func:`configure_logging` once at startup.

Usage:
    from paddock.logging_config import configure_logging
    configure_logging()
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any, ClassVar

NAMESPACE = "paddock"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "msecs",
        "relativeCreated",
        "taskName",
    }
)

# Extra fields promoted into the text format so a line reads on its own.
CONTEXT_FIELDS: tuple[str, ...] = ("horse_id", "skill_id")

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}


class JSONFormatter(logging.Formatter):
    """JSON lines formatter.

    Fields come out in a fixed order: timestamp, level, logger, message, then
    source/exception/extra when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON string with log data.
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno in (logging.DEBUG, logging.ERROR, logging.CRITICAL):
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = _extra_fields(record)
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter.

    Format: TIMESTAMP LEVEL [LOGGER] MESSAGE {horse_id=.. skill_id=..}
    DEBUG and ERROR lines also carry file:line.
    """

    LEVEL_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;31m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize formatter.

        Args:
            use_colors: Whether to use ANSI colors (only honoured on a TTY).
        """
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text.

        Args:
            record: Log record to format.

        Returns:
            Formatted string.
        """
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        level = record.levelname

        if self.use_colors:
            color = self.LEVEL_COLORS.get(level, "")
            level_str = f"{color}{level:8s}{self.RESET}"
        else:
            level_str = f"{level:8s}"

        logger_name = record.name
        if logger_name.startswith(NAMESPACE + "."):
            logger_name = logger_name[len(NAMESPACE) + 1 :]

        parts = [f"{timestamp} {level_str} [{logger_name}] {record.getMessage()}"]

        context = [
            f"{key}={record.__dict__[key]}" for key in CONTEXT_FIELDS if key in record.__dict__
        ]
        if context:
            parts.append(" {" + " ".join(context) + "}")

        if record.levelno in (logging.DEBUG, logging.ERROR, logging.CRITICAL):
            parts.append(f" ({record.filename}:{record.lineno})")

        if record.exc_info:
            parts.append(f"\n{self.formatException(record.exc_info)}")

        return "".join(parts)


def _env(name: str, default: str) -> str:
    return os.environ.get(f"PADDOCK_{name}") or os.environ.get(name) or default


def get_log_level() -> int:
    """Get log level from PADDOCK_LOG_LEVEL or LOG_LEVEL.

    Unknown names fall back to INFO.

    Returns:
        Logging level constant (e.g., logging.INFO).
    """
    return _LEVELS.get(_env("LOG_LEVEL", "INFO").upper(), logging.INFO)


def get_log_format() -> str:
    """Get log format from PADDOCK_LOG_FORMAT or LOG_FORMAT.

    Returns:
        'text' or 'json'; anything else reads as 'text'.
    """
    format_name = _env("LOG_FORMAT", "text").lower()
    if format_name not in ("text", "json"):
        return "text"
    return format_name


def configure_logging(
    level: int | None = None,
    format_type: str | None = None,
    use_colors: bool = True,
) -> None:
    """Configure the ``paddock`` logger namespace.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        level: Log level. If None, read from the environment.
        format_type: 'text' or 'json'. If None, read from the environment.
        use_colors: Whether to use colors in text format (TTY only).
    """
    if level is None:
        level = get_log_level()
    if format_type is None:
        format_type = get_log_format()

    handler = logging.StreamHandler(sys.stderr)
    formatter: logging.Formatter
    if format_type == "json":
        formatter = JSONFormatter()
    else:
        formatter = TextFormatter(use_colors=use_colors)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger(NAMESPACE)
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False

    root_logger.debug(
        "Logging configured: level=%s, format=%s",
        logging.getLevelName(level),
        format_type,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``paddock`` namespace.

    Args:
        name: Module name (typically __name__).

    Returns:
        Logger instance.
    """
    if not name.startswith(NAMESPACE):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)
