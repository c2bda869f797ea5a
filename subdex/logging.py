"""Structured logging setup."""

from __future__ import annotations

import logging

import structlog


def configure_logging(level: str | int = "INFO") -> None:
    """Configure structlog with console output filtered at level.

    Args:
        level: Level name ("DEBUG", "info", ...) or a logging level number

    Raises:
        ValueError: If level is not a known level name
    """
    if isinstance(level, str):
        log_level = logging.getLevelNamesMapping().get(level.upper())
        if log_level is None:
            raise ValueError(f"Unknown log level: {level}")
    else:
        log_level = level

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
