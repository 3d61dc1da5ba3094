"""
refract Logging Module
======================
Logging setup for refract.

Example:
    >>> from refract.logging import configure_logging, context
    >>>
    >>> configure_logging(level="DEBUG", fmt="json")
    >>> with context(request_id="123"):
    ...     optic.then(other)
"""

from .core import (
    # Levels
    DEBUG,
    INFO,
    WARNING,
    ERROR,
    CRITICAL,
    resolve_level,
    set_level,
    get_level,
    # Formatters
    Formatter,
    JSONFormatter,
    # Handlers
    StreamHandler,
    # Context
    ContextFilter,
    add_context,
    get_context,
    clear_context,
    context,
    # Loggers
    LIBRARY_LOGGER,
    get_logger,
    configure_logging,
    # Utilities
    LogCapture,
)

__all__ = [
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "resolve_level",
    "set_level",
    "get_level",
    "Formatter",
    "JSONFormatter",
    "StreamHandler",
    "ContextFilter",
    "add_context",
    "get_context",
    "clear_context",
    "context",
    "LIBRARY_LOGGER",
    "get_logger",
    "configure_logging",
    "LogCapture",
]
