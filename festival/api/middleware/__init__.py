"""HTTP middleware."""

from festival.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
