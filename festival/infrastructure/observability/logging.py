"""structlog setup for the festival service.

Renderers by ENVIRONMENT:
    production   one JSON object per line
    test         plain console output without colours
    anything else (development) coloured console output

A production entry looks like:
    {"event": "screening_transitioned", "level": "info",
     "timestamp": "2026-06-01T12:00:00Z", "correlation_id": "...",
     "service": "ScreeningService", "component": "screenings",
     "operation": "review_screening", "screening_id": 7, "state": "REVIEWED"}
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from festival.infrastructure.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _log_level() -> int:
    name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _renderer(environment: str) -> Processor:
    if environment == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=environment != "test")


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog once per process (or per app in tests)."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
    ]
    if environment == "production":
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(environment))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=environment != "test",
    )
