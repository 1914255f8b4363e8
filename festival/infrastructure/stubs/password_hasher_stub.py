"""Fast, deterministic password hasher for tests and local development.

Uses salted SHA-256 so unit tests do not pay for bcrypt rounds. NOT
suitable for production; use PasslibPasswordHasher instead.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

from festival.application.ports.password_hasher import PasswordHasherProtocol

_PREFIX = "stub-sha256"


class PasswordHasherStub(PasswordHasherProtocol):
    """Salted SHA-256 hasher producing 'stub-sha256$<salt>$<hex>'."""

    def hash(self, raw_password: str) -> str:
        salt = secrets.token_hex(8)
        digest = hashlib.sha256(f"{salt}:{raw_password}".encode()).hexdigest()
        return f"{_PREFIX}${salt}${digest}"

    def matches(self, raw_password: str, password_hash: str) -> bool:
        try:
            prefix, salt, digest = password_hash.split("$", 2)
        except ValueError:
            return False
        if prefix != _PREFIX:
            return False
        candidate = hashlib.sha256(f"{salt}:{raw_password}".encode()).hexdigest()
        return hmac.compare_digest(candidate, digest)
