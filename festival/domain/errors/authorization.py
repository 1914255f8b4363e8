"""Authorization errors (HTTP 403)."""

from __future__ import annotations

from typing import Any

from festival.domain.exceptions import FestivalError


class AuthorizationError(FestivalError):
    """Raised when an authenticated actor lacks the required relationship.

    Attributes:
        actor_id: The actor that was refused.
        action: The action that was attempted.
    """

    ERROR_CODE = "FORBIDDEN"
    HTTP_STATUS = 403

    def __init__(
        self,
        message: str,
        actor_id: int | None = None,
        action: str | None = None,
    ) -> None:
        self.actor_id = actor_id
        self.action = action
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.action is not None:
            result["action"] = self.action
        return result


class IdentityMismatchError(AuthorizationError):
    """Raised when a token owner acts as a different, non-admin user.

    Both accounts have already been deactivated by the time this is raised.

    Attributes:
        claimed_user_id: The identity the request claimed.
        token_owner_id: The identity proven by the token.
    """

    ERROR_CODE = "IDENTITY_MISMATCH"

    def __init__(self, claimed_user_id: int, token_owner_id: int) -> None:
        self.claimed_user_id = claimed_user_id
        self.token_owner_id = token_owner_id
        super().__init__(
            f"Token owner {token_owner_id} attempted to act as user "
            f"{claimed_user_id}; both accounts deactivated",
            actor_id=token_owner_id,
            action="identity_mismatch",
        )
