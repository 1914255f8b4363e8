"""Observability: structured logging and correlation ids."""

from festival.infrastructure.observability.correlation import (
    accept_correlation_id,
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
)
from festival.infrastructure.observability.logging import configure_structlog

__all__ = [
    "accept_correlation_id",
    "configure_structlog",
    "correlation_id_processor",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
]
