"""
Structured logging setup.

Call ``configure_logging(log_level, log_format)`` once at startup (the CLI and
the server do this) and acquire loggers with ``structlog.get_logger(__name__)``.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.stdlib import LoggerFactory, add_logger_name


def configure_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure stdlib logging and structlog.

    ``log_format`` is ``json`` for machine-readable output or ``console`` for
    local use.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_logger_name,
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )
