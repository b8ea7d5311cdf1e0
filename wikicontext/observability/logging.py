"""
Structured logging configuration using structlog.

Provides JSON-formatted logs for production and pretty console
logs for development. Supports contextual logging with bound
fields (e.g., query, source_url).
"""

import logging
import sys

import structlog
from structlog.types import Processor

from wikicontext.config.settings import Settings, get_settings


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure structured logging for the engine.

    In production: JSON-formatted logs on stderr
    In development: Pretty console output on stderr

    Logs go to stderr so stdout stays free for protocol output
    when the engine runs behind a stdio front end.

    Usage:
        setup_logging()
        logger = structlog.get_logger()
        logger.info("Fetched source", url="https://...", origin="network")
    """
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_production:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level),
    )

    # Set log levels for noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("markdown").setLevel(logging.WARNING)
