"""Request logging and X-Correlation-ID propagation.

Usage:
    app.add_middleware(LoggingMiddleware)

A well-formed X-Correlation-ID from the client is reused; otherwise a new
id is generated. Either way the id is echoed on the response, including
error responses produced by the FestivalError handler.
"""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from festival.infrastructure.observability.correlation import (
    accept_correlation_id,
    correlation_scope,
)

CORRELATION_HEADER = "X-Correlation-ID"
ACTING_USER_HEADER = "X-Acting-User-Id"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one start and one end entry per request under its correlation id."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        correlation_id = accept_correlation_id(request.headers.get(CORRELATION_HEADER))
        log = structlog.get_logger().bind(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
            acting_as=request.headers.get(ACTING_USER_HEADER),
        )

        with correlation_scope(correlation_id):
            log.info("request_started")
            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as exc:
                log.exception(
                    "request_failed",
                    duration_ms=_elapsed_ms(started),
                    error_type=type(exc).__name__,
                )
                raise

            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
            )
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
