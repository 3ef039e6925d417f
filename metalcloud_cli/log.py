"""Structured logging with structlog."""

import logging
import sys

import structlog

DEFAULT_LOG_LEVEL = "warning"

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """
    Configure structlog for the CLI.

    Log lines go to stderr so that tables written to stdout can be piped.
    Events below the given level are dropped.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = getattr(logging, DEFAULT_LOG_LEVEL.upper())

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
