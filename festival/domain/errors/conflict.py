"""Conflict and invariant errors (HTTP 409)."""

from __future__ import annotations

from festival.domain.exceptions import FestivalError


class ConflictError(FestivalError):
    """Raised when a request conflicts with existing data or roles."""

    ERROR_CODE = "CONFLICT"
    HTTP_STATUS = 409


class AlreadyMemberError(ConflictError):
    """Raised when a user already holds the requested program role.

    Attributes:
        user_id: The user.
        role: "PROGRAMMER" or "STAFF".
    """

    ERROR_CODE = "ALREADY_MEMBER"

    def __init__(self, user_id: int, role: str) -> None:
        self.user_id = user_id
        self.role = role
        super().__init__(f"User {user_id} is already {role}")


class InvariantViolationError(FestivalError):
    """Raised when an operation would break a structural invariant."""

    ERROR_CODE = "INVARIANT_VIOLATION"
    HTTP_STATUS = 409
