"""
refract Logging Module
======================
Logging helpers for applications and tests using refract.

Features:
- Level helpers accepting names or numbers
- Plain and JSON formatters
- Context management for structured logging
- Log capture for tests

refract modules log through ``logging.getLogger(__name__)`` and never attach
handlers themselves; call ``configure_logging`` to see their output.
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from ..errors import ConfigurationError


# ============================================================================
# LEVELS
# ============================================================================

DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL

_LEVEL_NAMES = {
    "DEBUG": DEBUG,
    "INFO": INFO,
    "WARNING": WARNING,
    "ERROR": ERROR,
    "CRITICAL": CRITICAL,
}

LIBRARY_LOGGER = "refract"


def resolve_level(level: Union[int, str]) -> int:
    """Convert a level name or number to a logging level.

    Raises:
        ConfigurationError: If the name is not a known level
    """
    if isinstance(level, int):
        return level
    try:
        return _LEVEL_NAMES[str(level).upper()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown logging level: {level!r}", config_key="logging.level"
        ) from None


def set_level(logger: Union[str, logging.Logger], level: Union[int, str]) -> None:
    """Set the logging level for a logger.

    Args:
        logger: Logger name or logger instance
        level: Logging level (int or string name)
    """
    if isinstance(logger, str):
        logger = get_logger(logger)
    logger.setLevel(resolve_level(level))


def get_level(logger: Union[str, logging.Logger]) -> int:
    if isinstance(logger, str):
        logger = get_logger(logger)
    return logger.level


# ============================================================================
# FORMATTERS
# ============================================================================


class Formatter(logging.Formatter):
    """Plain text formatter."""

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
    ):
        if fmt is None:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        super().__init__(fmt=fmt, datefmt=datefmt)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    _STANDARD_ATTRS = set(
        logging.LogRecord("", 0, "", 0, "", (), None).__dict__
    ) | {"message", "asctime"}

    def __init__(
        self,
        fields: Optional[List[str]] = None,
        timestamp_field: str = "timestamp",
    ):
        super().__init__()
        self.fields = fields or ["name", "levelname", "message", "funcName", "lineno"]
        self.timestamp_field = timestamp_field

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        log_data: Dict[str, Any] = {}

        for name in self.fields:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        log_data[self.timestamp_field] = datetime.fromtimestamp(record.created).isoformat()

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Extra fields and logging context
        for key, value in record.__dict__.items():
            if key in log_data or key in self._STANDARD_ATTRS or key.startswith("_"):
                continue
            log_data[key] = value

        return json.dumps(log_data, default=str)


_FORMATTERS = {"plain": Formatter, "json": JSONFormatter}


# ============================================================================
# HANDLERS
# ============================================================================


class StreamHandler(logging.StreamHandler):
    """Stream handler with formatter support."""

    def __init__(
        self,
        stream: Any = None,
        formatter: Optional[logging.Formatter] = None,
        level: Union[int, str] = DEBUG,
    ):
        super().__init__(stream if stream is not None else sys.stderr)
        if formatter:
            self.setFormatter(formatter)
        self.setLevel(resolve_level(level))


# ============================================================================
# CONTEXT
# ============================================================================

_context_var: ContextVar[Dict[str, Any]] = ContextVar("refract_logging_context", default={})


class ContextFilter(logging.Filter):
    """Filter that adds context information to log records."""

    def __init__(self, context_dict: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.context_dict = context_dict or {}

    def filter(self, record: logging.LogRecord) -> bool:
        merged = {**self.context_dict, **_context_var.get({})}
        for key, value in merged.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def add_context(key: str, value: Any) -> None:
    """Add a context key-value pair."""
    _context_var.set({**_context_var.get({}), key: value})


def get_context() -> Dict[str, Any]:
    return _context_var.get({}).copy()


def clear_context() -> None:
    _context_var.set({})


@contextmanager
def context(**kwargs):
    """Context manager for temporary logging context.

    Example:
        >>> with context(optic="user.email"):
        ...     logger.info("Updating")
    """
    token = _context_var.set({**_context_var.get({}), **kwargs})
    try:
        yield
    finally:
        _context_var.reset(token)


# ============================================================================
# LOGGERS
# ============================================================================


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger by name, or the ``refract`` library logger."""
    return logging.getLogger(name or LIBRARY_LOGGER)


def configure_logging(
    level: Union[int, str] = WARNING,
    fmt: str = "plain",
    stream: Any = None,
    logger_name: str = LIBRARY_LOGGER,
) -> logging.Logger:
    """Attach a single console handler to the refract logger.

    Args:
        level: Logging level (int or string name)
        fmt: ``"plain"`` or ``"json"``
        stream: Output stream (defaults to stderr)
        logger_name: Logger to configure

    Returns:
        The configured logger

    Raises:
        ConfigurationError: If ``level`` or ``fmt`` is unknown
    """
    if fmt not in _FORMATTERS:
        raise ConfigurationError(
            f"Unknown log format: {fmt!r} (expected one of {sorted(_FORMATTERS)})",
            config_key="logging.format",
        )
    resolved = resolve_level(level)

    logger = get_logger(logger_name)
    logger.setLevel(resolved)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = StreamHandler(stream=stream, formatter=_FORMATTERS[fmt](), level=resolved)
    handler.addFilter(ContextFilter())
    logger.addHandler(handler)
    return logger


# ============================================================================
# UTILITIES
# ============================================================================


class LogCapture:
    """Context manager to capture log output."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        level: int = DEBUG,
    ):
        self.logger = logger or get_logger()
        self.level = level
        self.records: List[logging.LogRecord] = []
        self._handler: Optional[logging.Handler] = None
        self._previous_level: Optional[int] = None

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def __enter__(self):
        self._handler = logging.Handler()
        self._handler.emit = self.emit
        self._handler.setLevel(self.level)
        self._previous_level = self.logger.level
        self.logger.setLevel(self.level)
        self.logger.addHandler(self._handler)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._handler:
            self.logger.removeHandler(self._handler)
        if self._previous_level is not None:
            self.logger.setLevel(self._previous_level)

    def get_messages(self) -> List[str]:
        return [r.getMessage() for r in self.records]

    def contains(self, text: str) -> bool:
        """Check if any message contains text."""
        return any(text in msg for msg in self.get_messages())


# ============================================================================
# MODULE EXPORTS
# ============================================================================

__all__ = [
    # Levels
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "resolve_level",
    "set_level",
    "get_level",
    # Formatters
    "Formatter",
    "JSONFormatter",
    # Handlers
    "StreamHandler",
    # Context
    "ContextFilter",
    "add_context",
    "get_context",
    "clear_context",
    "context",
    # Loggers
    "LIBRARY_LOGGER",
    "get_logger",
    "configure_logging",
    # Utilities
    "LogCapture",
]
