"""Logging configuration for BrowserSnapshot."""

import logging
import os
import sys
from enum import IntEnum
from typing import Any, Dict, List, Optional

import structlog


class LogLevel(IntEnum):
    """Log levels, ordered by verbosity."""
    ERROR = 0
    WARN = 1
    INFO = 2
    DEBUG = 3


# Name of the stdlib logger every session writes through
LOGGER_NAME = "browser_snapshot"

_configured = False


def configure_logging(verbose: int = 0) -> structlog.stdlib.BoundLogger:
    """
    Configure structlog for BrowserSnapshot.

    Process-wide setup runs once. The stdlib logger passes every level and
    each BrowserSnapshotLogger filters by its own verbosity, so sessions with
    different verbosities can coexist.

    Snapshots are often printed to stdout for an agent to read, so log
    output always goes to stderr.

    Args:
        verbose: Verbosity level (0-3), bound onto the returned logger

    Returns:
        Configured logger instance
    """
    global _configured
    if not _configured:
        processors: List[Any] = [
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if sys.stderr.isatty() and os.getenv("NO_COLOR") is None:
            processors.append(structlog.dev.ConsoleRenderer())
        else:
            processors.append(structlog.processors.JSONRenderer())

        structlog.configure(
            processors=processors,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        stdlib_logger = logging.getLogger(LOGGER_NAME)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        stdlib_logger.addHandler(handler)
        stdlib_logger.setLevel(logging.DEBUG)
        stdlib_logger.propagate = False
        _configured = True

    level = LogLevel(max(0, min(verbose, LogLevel.DEBUG)))
    return structlog.get_logger(LOGGER_NAME).bind(verbose=int(level))


class LogLine:
    """Represents a structured log line."""

    def __init__(
        self,
        category: str,
        message: str,
        level: LogLevel = LogLevel.INFO,
        auxiliary: Optional[Dict[str, Any]] = None,
    ):
        self.category = category
        self.message = message
        self.level = level
        self.auxiliary = auxiliary or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "level_name": self.level.name,
            **self.auxiliary,
        }


class BrowserSnapshotLogger:
    """Category-aware logger wrapper, filtered by verbosity."""

    _METHODS = {
        LogLevel.ERROR: "error",
        LogLevel.WARN: "warning",
        LogLevel.INFO: "info",
        LogLevel.DEBUG: "debug",
    }

    def __init__(self, logger: Any, verbose: int = 0):
        self.logger = logger
        self.verbose = verbose

    @classmethod
    def create(cls, verbose: int = 0) -> 'BrowserSnapshotLogger':
        """Wrap a structlog logger filtered at ``verbose``; structlog is configured once."""
        return cls(configure_logging(verbose), verbose)

    def log(self, log_line: LogLine) -> None:
        """Log a structured log line."""
        if log_line.level.value > self.verbose:
            return

        log_method = getattr(self.logger, self._METHODS[log_line.level], self.logger.info)
        log_method(log_line.message, **log_line.to_dict())

    def error(self, category: str, message: str, **kwargs: Any) -> None:
        self.log(LogLine(category, message, LogLevel.ERROR, kwargs))

    def warn(self, category: str, message: str, **kwargs: Any) -> None:
        self.log(LogLine(category, message, LogLevel.WARN, kwargs))

    def info(self, category: str, message: str, **kwargs: Any) -> None:
        self.log(LogLine(category, message, LogLevel.INFO, kwargs))

    def debug(self, category: str, message: str, **kwargs: Any) -> None:
        self.log(LogLine(category, message, LogLevel.DEBUG, kwargs))

    def child(self, **bindings: Any) -> 'BrowserSnapshotLogger':
        """Create a child logger with additional context."""
        return BrowserSnapshotLogger(self.logger.bind(**bindings), self.verbose)
