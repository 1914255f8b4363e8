"""User account model and base roles.

BaseRole is a closed set. Role-gated behaviour looks capabilities up in
ROLE_CAPABILITIES, which covers every role, instead of comparing role
strings at call sites.

Two independent gates control authentication:
    - active: toggled only by explicit activation/deactivation
    - locked: failed_login_attempts reached the lockout threshold
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from festival.domain.errors.validation import ValidationError

USERNAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]{4,19}$")
DEFAULT_LOCKOUT_THRESHOLD = 3


class BaseRole(Enum):
    """Global account category."""

    ADMIN = "ADMIN"
    PROGRAMMER = "PROGRAMMER"
    STAFF = "STAFF"
    SUBMITTER = "SUBMITTER"
    USER = "USER"


class Capability(Enum):
    """Global, role-derived permissions.

    Program-scoped permissions (programmer/staff of a specific program)
    are relationships, not capabilities, and are checked by the
    authorization guard against the program's role set.
    """

    MANAGE_USERS = "MANAGE_USERS"
    ACT_AS_OTHER_USER = "ACT_AS_OTHER_USER"
    VIEW_AUDIT_LOG = "VIEW_AUDIT_LOG"
    CREATE_PROGRAM = "CREATE_PROGRAM"
    CREATE_SCREENING = "CREATE_SCREENING"


_MEMBER_CAPABILITIES: frozenset[Capability] = frozenset(
    {Capability.CREATE_PROGRAM, Capability.CREATE_SCREENING}
)

ROLE_CAPABILITIES: dict[BaseRole, frozenset[Capability]] = {
    BaseRole.ADMIN: frozenset(Capability),
    BaseRole.PROGRAMMER: _MEMBER_CAPABILITIES,
    BaseRole.STAFF: _MEMBER_CAPABILITIES,
    BaseRole.SUBMITTER: _MEMBER_CAPABILITIES,
    BaseRole.USER: _MEMBER_CAPABILITIES,
}


def validate_username(username: str | None) -> str:
    """Return the trimmed username or raise ValidationError."""
    candidate = (username or "").strip()
    if not USERNAME_PATTERN.match(candidate):
        raise ValidationError(
            "Username must start with a letter and contain 5-20 letters, "
            "digits or underscores",
            field="username",
        )
    return candidate


@dataclass(frozen=True, eq=True)
class User:
    """A user account.

    Attributes:
        id: Store-assigned identifier; None until first saved.
        username: Unique login name matching USERNAME_PATTERN.
        password_hash: Opaque hash produced by the password hasher.
        full_name: Display name.
        role: Global base role.
        active: Whether the account may authenticate.
        failed_login_attempts: Consecutive failed logins.
        current_token_id: Identifier of the only valid session token.
        last_login_at: Last successful login.
    """

    username: str
    password_hash: str
    full_name: str
    role: BaseRole = field(default=BaseRole.USER)
    active: bool = field(default=False)
    failed_login_attempts: int = field(default=0)
    current_token_id: str | None = field(default=None)
    last_login_at: datetime | None = field(default=None)
    id: int | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate user fields."""
        validate_username(self.username)
        if not self.password_hash:
            raise ValidationError("Password hash is required", field="password")
        if self.failed_login_attempts < 0:
            raise ValidationError("Failed login attempts cannot be negative")

    @property
    def is_admin(self) -> bool:
        return self.role is BaseRole.ADMIN

    def is_locked(self, threshold: int = DEFAULT_LOCKOUT_THRESHOLD) -> bool:
        return self.failed_login_attempts >= threshold

    def has_capability(self, capability: Capability) -> bool:
        return capability in ROLE_CAPABILITIES[self.role]

    def with_id(self, user_id: int) -> User:
        return replace(self, id=user_id)

    def with_username(self, username: str) -> User:
        """Change the username; the current session is invalidated."""
        return replace(
            self, username=validate_username(username), current_token_id=None
        )

    def with_full_name(self, full_name: str) -> User:
        if full_name is None or not full_name.strip():
            raise ValidationError("Full name cannot be blank", field="full_name")
        return replace(self, full_name=full_name.strip())

    def with_password_hash(self, password_hash: str) -> User:
        """Change the password; failures reset and the session is invalidated."""
        return replace(
            self,
            password_hash=password_hash,
            failed_login_attempts=0,
            current_token_id=None,
        )

    def activate(self) -> User:
        return replace(self, active=True, failed_login_attempts=0)

    def deactivate(self) -> User:
        return replace(self, active=False, current_token_id=None)

    def register_failed_login(self) -> User:
        return replace(self, failed_login_attempts=self.failed_login_attempts + 1)

    def start_session(self, token_id: str, at: datetime) -> User:
        if not token_id or not token_id.strip():
            raise ValidationError("Token id cannot be blank")
        return replace(
            self,
            current_token_id=token_id,
            last_login_at=at,
            failed_login_attempts=0,
        )

    def invalidate_session(self) -> User:
        return replace(self, current_token_id=None)
