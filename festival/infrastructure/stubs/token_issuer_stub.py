"""In-memory token issuer stub.

Tokens are opaque random strings mapped to their claims. The revocation
set is guarded by a threading.Lock so concurrent inserts and lookups do
not lose updates.
"""

from __future__ import annotations

import secrets
import threading
from datetime import timedelta
from uuid import uuid4

from festival.application.ports.time_authority import TimeAuthorityProtocol
from festival.application.ports.token_issuer import (
    IssuedToken,
    TokenClaims,
    TokenIssuerProtocol,
)
from festival.domain.errors.authentication import (
    ExpiredTokenError,
    InvalidTokenError,
)
from festival.domain.models.user import User


class TokenIssuerStub(TokenIssuerProtocol):
    """Opaque-token implementation of TokenIssuerProtocol.

    Attributes:
        _claims: Issued tokens mapped to their claims.
        _revoked: Revoked tokens.
    """

    def __init__(
        self,
        time_authority: TimeAuthorityProtocol,
        ttl_seconds: int = 3600,
    ) -> None:
        self._time = time_authority
        self._ttl = timedelta(seconds=ttl_seconds)
        self._claims: dict[str, TokenClaims] = {}
        self._revoked: set[str] = set()
        self._lock = threading.Lock()

    def issue(self, user: User) -> IssuedToken:
        if user.id is None:
            raise ValueError("Cannot issue a token for an unsaved user")
        issued_at = self._time.utcnow()
        claims = TokenClaims(
            user_id=user.id,
            token_id=str(uuid4()),
            role=user.role,
            issued_at=issued_at,
            expires_at=issued_at + self._ttl,
        )
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._claims[token] = claims
        return IssuedToken(
            token=token,
            token_id=claims.token_id,
            user_id=claims.user_id,
            expires_at=claims.expires_at,
        )

    def verify(self, token: str) -> TokenClaims:
        claims = self._claims.get(token)
        if claims is None:
            raise InvalidTokenError()
        if self._time.utcnow() >= claims.expires_at:
            raise ExpiredTokenError()
        return claims

    def invalidate(self, token: str) -> None:
        with self._lock:
            self._revoked.add(token)

    def is_invalidated(self, token: str) -> bool:
        with self._lock:
            return token in self._revoked

    @property
    def revoked_count(self) -> int:
        """Number of revoked tokens (test inspection)."""
        with self._lock:
            return len(self._revoked)
