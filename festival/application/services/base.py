"""Structured logging shared by the festival application services.

Every service calls _init_logger() once in __init__ and then takes an
operation-scoped logger per use-case:

    class ScreeningService(LoggingMixin):
        def __init__(self, ...) -> None:
            ...
            self._init_logger(component="screenings")

        def review(self, actor_id: int, screening_id: int, ...) -> Screening:
            log = self._log_operation("review", actor_id=actor_id)
            ...
            log.info("screening_reviewed", screening_id=screening_id)

Rejected requests are logged at warning level through _log_rejection(),
which returns the error so the caller can raise it in one statement.
"""

import structlog

from festival.domain.exceptions import FestivalError
from festival.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Binds service, component and per-operation context to structlog.

    Attributes:
        _log: Logger bound with service (class name) and component.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "festival") -> None:
        """Bind the service name and component; call from __init__."""
        self._log = structlog.get_logger().bind(
            service=type(self).__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Return a logger bound to operation and the request correlation id.

        Args:
            operation: Use-case name, e.g. "change_state".
            **context: Ids of the actor and aggregates involved.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )

    def _log_rejection(
        self, log: structlog.BoundLogger, error: FestivalError
    ) -> FestivalError:
        """Log a refused request with its error code and hand the error back."""
        log.warning(
            "operation_rejected",
            error_code=error.ERROR_CODE,
            detail=str(error),
        )
        return error
