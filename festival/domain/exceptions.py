"""Base exception classes for the festival domain layer."""

from __future__ import annotations

from typing import Any


class FestivalError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so that
    the HTTP adapter can translate them with a single handler.

    Class Attributes:
        ERROR_CODE: Stable machine-readable error code.
        HTTP_STATUS: Status code used by the HTTP adapter.
    """

    ERROR_CODE: str = "FESTIVAL_ERROR"
    HTTP_STATUS: int = 500

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to an RFC 7807 compatible dictionary.

        Returns:
            Dictionary with error details for API responses.
        """
        return {
            "type": f"urn:festival:error:{self.ERROR_CODE.lower()}",
            "title": self.ERROR_CODE.replace("_", " ").title(),
            "status": self.HTTP_STATUS,
            "detail": self.message,
        }
