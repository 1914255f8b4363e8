"""Password hashing port."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherProtocol(Protocol):
    """One-way password hashing.

    Hashes are opaque to the core; only matches() may compare them.
    """

    def hash(self, raw_password: str) -> str:
        """Return a salted hash of raw_password."""
        ...

    def matches(self, raw_password: str, password_hash: str) -> bool:
        """Check raw_password against a stored hash."""
        ...
