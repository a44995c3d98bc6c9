"""Structured logging configuration using structlog.

Log lines go to stderr so that CLI output on stdout stays machine-readable.
Library loggers stay silent until the application configures structlog,
either through :func:`setup_logging` or its own ``structlog.configure``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def setup_logging(level: str = "INFO", *, json_logs: bool | None = None) -> None:
    """Configure structlog; ``json_logs=None`` picks JSON unless stderr is a terminal."""
    if json_logs is None:
        json_logs = not sys.stderr.isatty()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


class LibraryLogger:
    """Forwards events to structlog once it is configured and drops them before."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name

    def __getattr__(self, method: str) -> Any:
        def emit(event: str, **kw: Any) -> None:
            if structlog.is_configured():
                getattr(structlog.get_logger(self.name), method)(event, **kw)

        return emit


def get_logger(name: str | None = None) -> LibraryLogger:
    """Return a logger for library code, optionally named."""
    return LibraryLogger(name)
