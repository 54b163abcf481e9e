"""
Logging setup for applications embedding monie.

Every module logs through get_logger(__name__), which binds structlog to a
standard library logger under the "monie" namespace. That namespace carries
a NullHandler, so debug events stay silent until the host configures
logging. Call configure_logging() once at startup to route those events
through the standard library as console or JSON lines.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    if method_name == "warn":
        method_name = "warning"
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure structured logging.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown -> INFO)
        json_output: render JSON lines instead of the console format
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        level=numeric_level,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # capture_logs() in tests needs an uncached logger
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    logger = get_logger(__name__); logger.info("message", key="value")

    The wrapped stdlib logger decides whether an event is emitted, so an
    unconfigured host drops debug events instead of printing them.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
