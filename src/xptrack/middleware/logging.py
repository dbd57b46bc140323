"""Structured logging configuration with structlog."""

import logging

import structlog

from xptrack.config import Settings

# Library loggers that are chatty at INFO and below.
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio")


def setup_logging(settings: Settings) -> None:
    """Configure structlog for JSON or console output.

    Library loggers stay at WARNING unless ``debug`` is on, in which case they
    follow ``log_level``.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if settings.log_format == "json" else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if settings.debug else max(level, logging.WARNING))
