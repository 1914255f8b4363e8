"""User repository port."""

from __future__ import annotations

from typing import Protocol

from festival.domain.models.user import User


class UserRepositoryProtocol(Protocol):
    """Protocol for user persistence."""

    def get(self, user_id: int) -> User | None:
        """Retrieve a user by id."""
        ...

    def get_by_username(self, username: str) -> User | None:
        """Retrieve a user by exact username."""
        ...

    def save(self, user: User) -> User:
        """Persist a user; assigns an id on first save."""
        ...

    def exists_by_username(self, username: str) -> bool:
        """Check whether the username is taken."""
        ...

    def delete(self, user_id: int) -> None:
        """Remove a user. Missing ids are ignored."""
        ...
