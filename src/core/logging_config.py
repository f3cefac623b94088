"""Structured logging configuration.

This module initializes structlog with a stable JSON line format.
Loggers are created once per entry point and passed down explicitly.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL, SUPPORTED_LOG_LEVELS
from core.errors import TallyConfigError

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog processors and the minimum log level.

    Args:
        level: One of ``debug``, ``info``, ``warning`` or ``error``.

    Raises:
        TallyConfigError: If level is not supported.
    """
    normalized = level.lower()
    if normalized not in _LEVELS:
        raise TallyConfigError(
            f"Unsupported log level '{level}'. "
            f"Supported levels: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LEVELS[normalized]),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger bound to ``name``.
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so redirected streams are honored.
    return structlog.PrintLogger(file=sys.stderr)
