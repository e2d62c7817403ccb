"""Structured logging setup using structlog."""

import logging
import sys

import structlog

from src.core.config import settings


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Uses the JSON renderer unless ``log_format`` is ``console``.
    """
    level_name = (level or settings.log_level).upper()
    fmt = (log_format or settings.log_format).lower()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
        force=True,
    )

    renderer = (
        structlog.dev.ConsoleRenderer()
        if fmt == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
