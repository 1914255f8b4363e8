"""Session token port.

The token issuer owns the revocation set. Revocation insert and lookup
MUST be safe under concurrent requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from festival.domain.models.user import BaseRole, User


@dataclass(frozen=True)
class IssuedToken:
    """A freshly issued bearer token.

    Attributes:
        token: Encoded bearer token.
        token_id: Unique token identifier (JWT jti).
        user_id: Owner of the token.
        expires_at: Expiry time (UTC).
    """

    token: str
    token_id: str
    user_id: int
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    """Verified token contents."""

    user_id: int
    token_id: str
    role: BaseRole
    issued_at: datetime
    expires_at: datetime


class TokenIssuerProtocol(Protocol):
    """Issue, verify and revoke session tokens."""

    def issue(self, user: User) -> IssuedToken:
        """Issue a token for a persisted user."""
        ...

    def verify(self, token: str) -> TokenClaims:
        """Decode and verify a token.

        Raises:
            InvalidTokenError: Malformed token or bad signature.
            ExpiredTokenError: Token past its expiry.
        """
        ...

    def invalidate(self, token: str) -> None:
        """Add a token to the revocation set."""
        ...

    def is_invalidated(self, token: str) -> bool:
        """Check whether a token has been revoked."""
        ...
