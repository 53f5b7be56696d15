"""Logging configuration using structlog.

Development gets colored console output, production gets one JSON object
per line. Records from stdlib loggers (uvicorn, SQLAlchemy, alembic) go
through the same processors as structlog events.
"""

import logging
import sys

import structlog
from structlog.typing import Processor

from journey_planner.config import settings

# Third-party loggers and the level below which they are dropped
QUIET_LOGGERS: dict[str, int] = {
    "asyncio": logging.INFO,
    "aiosqlite": logging.WARNING,
    "uvicorn.access": logging.WARNING,
    # SQLAlchemy logs every statement at INFO when echo is enabled
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso" if settings.is_production else "%Y-%m-%d %H:%M:%S", utc=False),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _render_processors() -> list[Processor]:
    if settings.is_production:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=True, exception_formatter=structlog.dev.plain_traceback)]


def _root_level() -> int:
    if settings.debug:
        return logging.DEBUG
    return getattr(logging, settings.log_level.upper(), logging.INFO)


def configure_logging() -> None:
    """Configure structlog and route stdlib logging through it.

    Call this early in application startup (main.py and cli.py).
    """
    shared_processors = _shared_processors()

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *_render_processors()],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_root_level())

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


_configured = False


def setup_logging() -> None:
    """Setup logging once. Safe to call multiple times."""
    global _configured
    if not _configured:
        configure_logging()
        _configured = True
