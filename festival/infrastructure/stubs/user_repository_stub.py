"""In-memory user repository stub."""

from __future__ import annotations

import itertools
import threading

from festival.application.ports.user_repository import UserRepositoryProtocol
from festival.domain.models.user import User


class UserRepositoryStub(UserRepositoryProtocol):
    """In-memory implementation of UserRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._users: dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> User | None:
        return next(
            (u for u in self._users.values() if u.username == username), None
        )

    def save(self, user: User) -> User:
        with self._lock:
            if user.id is None:
                user = user.with_id(next(self._ids))
            self._users[user.id] = user  # type: ignore[index]
            return user

    def exists_by_username(self, username: str) -> bool:
        return self.get_by_username(username) is not None

    def delete(self, user_id: int) -> None:
        with self._lock:
            self._users.pop(user_id, None)

    def clear(self) -> None:
        """Remove every stored user (test helper)."""
        with self._lock:
            self._users.clear()
            self._ids = itertools.count(1)
