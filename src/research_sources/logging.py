"""Logging setup for research-sources.

Events are structlog JSON lines on stderr. stdout carries the MCP stdio
stream (and CLI tables), so nothing log-shaped may reach it.
"""
from __future__ import annotations

import logging
import sys
from typing import Literal

import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Per-request chatter from the HTTP stack
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: LogLevel = "INFO") -> None:
    """Route structlog and stdlib logging to stderr at ``level``.

    Provider connectors log through the stdlib; everything else goes
    through ``get_logger``. Safe to call again to change the level.
    """
    threshold = getattr(logging, level)
    logging.basicConfig(format="%(message)s", level=threshold, stream=sys.stderr)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(threshold, logging.WARNING))


def get_logger(name: str = "research_sources"):
    return structlog.get_logger(name)


configure_logging()
