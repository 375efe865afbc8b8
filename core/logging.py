"""
Structured logging setup.

Every module logs through ``get_logger()`` with a snake_case event name and
key/value context, e.g. ``log.info("game_finalized", game_id=12)``.
"""

import logging
import sys
from typing import Optional

import structlog


def setup_logging(
    log_level: str = "INFO",
    json_format: bool = True,
    service_name: Optional[str] = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Safe to call more than once; the last call wins.

    Args:
        log_level: Minimum level name (DEBUG, INFO, ...)
        json_format: Render JSON lines when True, coloured console output otherwise
        service_name: Added to every log line when provided
    """
    level = logging._nameToLevel.get(log_level.strip().upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if service_name:
        structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, optionally namespaced."""
    return structlog.get_logger(name or "pickup")
