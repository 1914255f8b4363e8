"""passlib-backed password hasher."""

from __future__ import annotations

from collections.abc import Sequence

from passlib.context import CryptContext

from festival.application.ports.password_hasher import PasswordHasherProtocol


class PasslibPasswordHasher(PasswordHasherProtocol):
    """Hashes passwords with a passlib CryptContext.

    The first scheme hashes new passwords; the rest are accepted for
    verification only and are marked deprecated.

    Args:
        schemes: passlib scheme names, e.g. ("bcrypt",).
    """

    def __init__(self, schemes: Sequence[str] = ("bcrypt",)) -> None:
        self._context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, raw_password: str) -> str:
        return self._context.hash(raw_password)

    def matches(self, raw_password: str, password_hash: str) -> bool:
        try:
            return self._context.verify(raw_password, password_hash)
        except ValueError:
            # Unrecognised or malformed hash
            return False
