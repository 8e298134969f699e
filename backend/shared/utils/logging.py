"""
Structured logging for the Live Picks backend.
structlog on top of stdlib logging so library records (uvicorn, SQLAlchemy)
go through the same renderer as our own events.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from shared.config import Environment, Settings, get_settings

_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "sqlalchemy.pool", "asyncio")

_BASE_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def render_chain(environment: Environment) -> list[structlog.types.Processor]:
    """
    Final processors for an environment. Outside dev, tracebacks from
    logger.exception() become structured lists inside the JSON line.
    """
    if environment == Environment.DEV:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def setup_logging(
    service_name: str,
    extra_context: dict[str, Any] | None = None,
    *,
    settings: Settings | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structured logging for a process.

    Args:
        service_name: The service identifier (api, enrichment).
        extra_context: Additional static context fields bound to every log entry.
        settings: Overrides get_settings(), mainly for tests.
        stream: Output stream, stdout by default.
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            *_BASE_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *render_chain(settings.environment),
        ],
        foreign_pre_chain=_BASE_PROCESSORS,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.contextvars.clear_contextvars()
    bound: dict[str, Any] = {"service": service_name, "instance_id": settings.instance_id}
    if extra_context:
        bound.update(extra_context)
    structlog.contextvars.bind_contextvars(**bound)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structured logger."""
    return structlog.get_logger(name)
