"""User account management.

Self-service operations (profile update, delete) run through
SessionIntegrityService.resolve_actor, so a non-admin acting on someone
else's account deactivates both accounts.
"""

from __future__ import annotations

from festival.application.ports.password_hasher import PasswordHasherProtocol
from festival.application.ports.program_repository import ProgramRepositoryProtocol
from festival.application.ports.user_repository import UserRepositoryProtocol
from festival.application.services.audit_trail_service import AuditTrailService
from festival.application.services.base import LoggingMixin
from festival.application.services.session_integrity_service import (
    SessionIntegrityService,
)
from festival.domain.errors.authentication import (
    AccountInactiveError,
    AuthenticationError,
)
from festival.domain.errors.authorization import AuthorizationError
from festival.domain.errors.conflict import ConflictError
from festival.domain.errors.validation import NotFoundError, ValidationError
from festival.domain.models.user import BaseRole, Capability, User, validate_username
from festival.domain.services.authorization_guard import require_capability
from festival.domain.services.password_policy import (
    DEFAULT_PASSWORD_POLICY,
    PasswordPolicy,
)


class UserAccountService(LoggingMixin):
    """Registration, profile, password and account-state operations."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        program_repository: ProgramRepositoryProtocol,
        password_hasher: PasswordHasherProtocol,
        session_integrity: SessionIntegrityService,
        audit_trail: AuditTrailService,
        password_policy: PasswordPolicy = DEFAULT_PASSWORD_POLICY,
    ) -> None:
        self._users = user_repository
        self._programs = program_repository
        self._hasher = password_hasher
        self._session = session_integrity
        self._audit = audit_trail
        self._policy = password_policy
        self._init_logger(component="users")

    def _load(self, user_id: int) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def _new_user(
        self,
        username: str,
        password: str,
        full_name: str,
        role: BaseRole,
        active: bool,
    ) -> User:
        clean_username = validate_username(username)
        if full_name is None or not full_name.strip():
            raise ValidationError("Full name is required", field="full_name")
        if self._users.exists_by_username(clean_username):
            raise ConflictError(f"Username already exists: {clean_username}")
        self._policy.ensure_valid(password, clean_username, full_name)
        return self._users.save(
            User(
                username=clean_username,
                password_hash=self._hasher.hash(password),
                full_name=full_name.strip(),
                role=role,
                active=active,
            )
        )

    def register(self, username: str, password: str, full_name: str) -> User:
        """Self-register a USER account; it starts inactive.

        Raises:
            ValidationError: Bad username, name or password.
            ConflictError: Username already taken.
        """
        user = self._new_user(username, password, full_name, BaseRole.USER, False)
        self._audit.record(user.id, "REGISTER", f"user {user.id}")
        self._log_operation("register", user_id=user.id).info("user_registered")
        return user

    def seed_user(
        self,
        username: str,
        password: str,
        full_name: str,
        role: BaseRole = BaseRole.USER,
    ) -> User:
        """Administratively create an active account."""
        user = self._new_user(username, password, full_name, role, True)
        self._log_operation("seed_user", user_id=user.id, role=role.value).info(
            "user_seeded"
        )
        return user

    def get_user(self, actor_id: int, target_id: int) -> User:
        """Return a profile; self or admin only."""
        actor = self._session.resolve_actor(target_id, actor_id)
        if actor.id != target_id:
            return self._load(target_id)
        return actor

    def update_profile(
        self,
        actor_id: int,
        target_id: int,
        username: str | None = None,
        full_name: str | None = None,
    ) -> User:
        """Change username and/or full name.

        A username change invalidates the target's current session.

        Raises:
            IdentityMismatchError: Non-admin actor editing another account.
            AccountInactiveError: Target account is inactive.
            ConflictError: New username already taken.
        """
        log = self._log_operation("update_profile", actor_id=actor_id, target_id=target_id)
        self._session.resolve_actor(target_id, actor_id)
        target = self._load(target_id)
        if not target.active:
            raise AccountInactiveError(target.username)

        updated = target
        if full_name is not None and full_name.strip():
            updated = updated.with_full_name(full_name)

        username_changed = False
        if username is not None and username.strip():
            candidate = username.strip()
            if candidate != target.username:
                if self._users.exists_by_username(candidate):
                    raise self._log_rejection(
                        log, ConflictError(f"Username already exists: {candidate}")
                    )
                updated = updated.with_username(candidate)
                username_changed = True

        saved = self._users.save(updated)
        if username_changed:
            saved = self._session.on_username_changed(saved)
        self._audit.record(actor_id, "UPDATE_USER", f"user {target_id}")
        log.info("profile_updated", username_changed=username_changed)
        return saved

    def change_password(
        self,
        user_id: int,
        current_password: str,
        new_password: str,
        repeat_password: str,
    ) -> User:
        """Change a user's own password.

        Inactive accounts and blank fields are refused untouched. After
        that the current session is invalidated before the remaining
        checks, so even a failed attempt forces a new login.

        Raises:
            AccountInactiveError: The account is inactive.
            ValidationError: Blank field, repeat mismatch or policy violation.
            AuthenticationError: Current password is wrong.
        """
        log = self._log_operation("change_password", user_id=user_id)
        user = self._load(user_id)
        if not user.active:
            raise self._log_rejection(log, AccountInactiveError(user.username))
        for field_name, value in (
            ("current_password", current_password),
            ("new_password", new_password),
            ("repeat_password", repeat_password),
        ):
            if value is None or not value.strip():
                raise ValidationError(f"{field_name} is required", field=field_name)

        user = self._users.save(user.invalidate_session())

        if new_password != repeat_password:
            raise ValidationError("New passwords do not match", field="repeat_password")
        if not self._hasher.matches(current_password or "", user.password_hash):
            self._session.on_authentication_failure(user)
            log.warning("password_change_wrong_current_password")
            raise AuthenticationError("Current password is incorrect")

        self._policy.ensure_valid(new_password, user.username, user.full_name)
        saved = self._users.save(user.with_password_hash(self._hasher.hash(new_password)))
        self._audit.record(user_id, "CHANGE_PASSWORD", f"user {user_id}")
        log.info("password_changed")
        return saved

    def activate(self, actor_id: int, target_id: int) -> User:
        """Activate an account and reset its failure counter (admin only)."""
        require_capability(self._load(actor_id), Capability.MANAGE_USERS)
        saved = self._users.save(self._load(target_id).activate())
        self._audit.record(actor_id, "ACTIVATE_USER", f"user {target_id}")
        self._log_operation("activate", actor_id=actor_id, target_id=target_id).info(
            "user_activated"
        )
        return saved

    def deactivate(self, actor_id: int, target_id: int) -> User:
        """Deactivate an account and end its session (admin only, idempotent)."""
        require_capability(self._load(actor_id), Capability.MANAGE_USERS)
        target = self._load(target_id)
        if not target.active:
            return target
        saved = self._users.save(target.deactivate())
        self._audit.record(actor_id, "DEACTIVATE_USER", f"user {target_id}")
        self._log_operation("deactivate", actor_id=actor_id, target_id=target_id).info(
            "user_deactivated"
        )
        return saved

    def delete_user(self, actor_id: int, target_id: int) -> None:
        """Delete a non-admin account (self or admin).

        Raises:
            AuthorizationError: Target is an admin account.
            IdentityMismatchError: Non-admin actor deleting another account.
            ConflictError: Target is still a member of a program.
        """
        log = self._log_operation("delete_user", actor_id=actor_id, target_id=target_id)
        target = self._load(target_id)
        if target.is_admin:
            raise AuthorizationError(
                "ADMIN accounts cannot be deleted", actor_id=actor_id, action="delete_user"
            )
        self._session.resolve_actor(target_id, actor_id)
        if self._programs.exists_with_member(target_id):
            raise self._log_rejection(
                log,
                ConflictError(
                    f"User {target_id} is a member of a program and cannot be deleted"
                ),
            )
        self._users.delete(target_id)
        self._audit.record(actor_id, "DELETE_USER", f"user {target_id}")
        log.info("user_deleted")
