"""
Structured logging configuration.

Console output while developing, one JSON object per line
everywhere else. structlog renders the event and hands the
line to a stdlib logger, so the usual handlers (and pytest's
caplog) see it.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from lms_admin.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure structlog and the stdlib root logger."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development or settings.DEBUG:
        processors: list[Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        # Rendered events go out through stdlib handlers
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    for logger_name in ("uvicorn.access", "httpx", "sqlalchemy"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    # basicConfig is a no-op when the root logger already has handlers
    logging.getLogger("lms_admin").setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structured logger for the given module name."""
    return structlog.get_logger(name)
