"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Optional

import structlog

from riesgo_gateway.core.config import Settings, settings as default_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Uses a JSON renderer unless `log_format` is "console". The
    Situación 5 debug trace is emitted at DEBUG level, so enabling
    `debug_situacion5` lowers the level accordingly.
    """
    settings = settings or default_settings

    level_name = "DEBUG" if settings.debug_situacion5 else settings.log_level.upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )

    if settings.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
