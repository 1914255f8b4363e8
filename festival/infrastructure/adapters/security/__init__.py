"""Security adapters: password hashing and signed session tokens."""

from festival.infrastructure.adapters.security.jose_token_issuer import (
    JoseTokenIssuer,
)
from festival.infrastructure.adapters.security.passlib_password_hasher import (
    PasslibPasswordHasher,
)

__all__ = ["JoseTokenIssuer", "PasslibPasswordHasher"]
