"""Session integrity rules.

- A token presented on behalf of a different, non-admin user is treated
  as a forged identity: both accounts are deactivated before the request
  fails with IdentityMismatchError. This is the only authorization failure
  that mutates state.
- Username changes clear the current session token identifier.
- Failed logins increment a counter; at the threshold the account is
  locked while `active` stays unchanged.
"""

from __future__ import annotations

from festival.application.ports.user_repository import UserRepositoryProtocol
from festival.application.services.audit_trail_service import AuditTrailService
from festival.application.services.base import LoggingMixin
from festival.domain.errors.authentication import AuthenticationError
from festival.domain.errors.authorization import IdentityMismatchError
from festival.domain.models.user import DEFAULT_LOCKOUT_THRESHOLD, User


class SessionIntegrityService(LoggingMixin):
    """Enforces identity consistency between tokens and claimed actors."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        audit_trail: AuditTrailService,
        lockout_threshold: int = DEFAULT_LOCKOUT_THRESHOLD,
    ) -> None:
        self._users = user_repository
        self._audit = audit_trail
        self._lockout_threshold = lockout_threshold
        self._init_logger(component="session")

    @property
    def lockout_threshold(self) -> int:
        return self._lockout_threshold

    def resolve_actor(
        self, claimed_user_id: int, verified_owner_id: int
    ) -> User:
        """Return the user a request acts as.

        Args:
            claimed_user_id: Identity the request claims to act for.
            verified_owner_id: Identity proven by the token.

        Returns:
            The verified owner. Admins may act on behalf of other users.

        Raises:
            AuthenticationError: If the verified owner no longer exists.
            IdentityMismatchError: If the ids differ and the owner is not an
                admin. Both accounts are deactivated first.
        """
        log = self._log_operation(
            "resolve_actor",
            claimed_user_id=claimed_user_id,
            verified_owner_id=verified_owner_id,
        )
        owner = self._users.get(verified_owner_id)
        if owner is None:
            log.warning("token_owner_missing")
            raise AuthenticationError("Token owner no longer exists")

        if claimed_user_id == verified_owner_id or owner.is_admin:
            return owner

        self._users.save(owner.deactivate())
        claimed = self._users.get(claimed_user_id)
        if claimed is not None:
            self._users.save(claimed.deactivate())

        log.critical("identity_mismatch_accounts_deactivated")
        self._audit.record(
            verified_owner_id,
            "IDENTITY_MISMATCH",
            f"claimed user {claimed_user_id}",
        )
        raise IdentityMismatchError(
            claimed_user_id=claimed_user_id, token_owner_id=verified_owner_id
        )

    def on_username_changed(self, user: User) -> User:
        """Clear the session of a user whose username changed."""
        updated = self._users.save(user.invalidate_session())
        self._log_operation("on_username_changed", user_id=user.id).info(
            "session_invalidated_after_username_change"
        )
        return updated

    def on_authentication_failure(self, user: User) -> User:
        """Count a failed login; lock at the threshold without deactivating."""
        updated = self._users.save(user.register_failed_login())
        log = self._log_operation(
            "on_authentication_failure",
            user_id=user.id,
            failed_attempts=updated.failed_login_attempts,
        )
        if updated.is_locked(self._lockout_threshold):
            log.warning("account_locked")
        else:
            log.info("authentication_failure_recorded")
        return updated
