"""python-jose backed session token issuer.

Tokens are HS256 JWTs carrying sub, jti, role, iat and exp. Expiry is
checked against the injected time authority rather than the wall clock
so that tests can control it.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import structlog
from jose import JWTError, jwt

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
from festival.domain.models.user import BaseRole, User

logger = structlog.get_logger()


class JoseTokenIssuer(TokenIssuerProtocol):
    """Signed JWT implementation of TokenIssuerProtocol.

    Revoked tokens are tracked by jti in a set guarded by a threading.Lock.

    Args:
        secret: HMAC signing secret.
        time_authority: Clock used for iat/exp.
        ttl_seconds: Token lifetime.
        algorithm: JWT algorithm.
    """

    def __init__(
        self,
        secret: str,
        time_authority: TimeAuthorityProtocol,
        ttl_seconds: int = 3600,
        algorithm: str = "HS256",
    ) -> None:
        self._secret = secret
        self._time = time_authority
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm
        self._revoked_ids: set[str] = set()
        self._lock = threading.Lock()

    def issue(self, user: User) -> IssuedToken:
        if user.id is None:
            raise ValueError("Cannot issue a token for an unsaved user")
        issued_at = self._time.utcnow()
        expires_at = issued_at + self._ttl
        token_id = str(uuid4())
        payload = {
            "sub": str(user.id),
            "jti": token_id,
            "role": user.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(
            token=token,
            token_id=token_id,
            user_id=user.id,
            expires_at=expires_at,
        )

    def _decode(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            logger.warning("token_decode_failed", error=str(exc))
            raise InvalidTokenError() from exc

    def verify(self, token: str) -> TokenClaims:
        payload = self._decode(token)
        try:
            claims = TokenClaims(
                user_id=int(payload["sub"]),
                token_id=str(payload["jti"]),
                role=BaseRole(payload["role"]),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError("Token is missing required claims") from exc
        if self._time.utcnow() >= claims.expires_at:
            raise ExpiredTokenError()
        return claims

    def invalidate(self, token: str) -> None:
        payload = self._decode(token)
        token_id = payload.get("jti")
        if not token_id:
            raise InvalidTokenError("Token is missing required claims")
        with self._lock:
            self._revoked_ids.add(str(token_id))

    def is_invalidated(self, token: str) -> bool:
        try:
            payload = self._decode(token)
        except InvalidTokenError:
            return False
        with self._lock:
            return str(payload.get("jti")) in self._revoked_ids
