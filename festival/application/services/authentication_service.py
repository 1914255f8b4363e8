"""Authentication service: login, token validation and logout.

Token validation order:
    1. revoked (logout blacklist)     -> TokenRevokedError
    2. signature / expiry             -> InvalidTokenError / ExpiredTokenError
    3. owner exists                   -> AuthenticationError
    4. owner active                   -> AccountInactiveError
    5. token id is the current session -> TokenRevokedError

Only one session per user is valid at a time: a new login, a password
change, a username change or a deactivation supersedes older tokens.
"""

from __future__ import annotations

from festival.application.ports.password_hasher import PasswordHasherProtocol
from festival.application.ports.time_authority import TimeAuthorityProtocol
from festival.application.ports.token_issuer import IssuedToken, TokenIssuerProtocol
from festival.application.ports.user_repository import UserRepositoryProtocol
from festival.application.services.audit_trail_service import AuditTrailService
from festival.application.services.base import LoggingMixin
from festival.application.services.session_integrity_service import (
    SessionIntegrityService,
)
from festival.domain.errors.authentication import (
    AccountInactiveError,
    AccountLockedError,
    AuthenticationError,
    TokenRevokedError,
)
from festival.domain.models.user import User


class AuthenticationService(LoggingMixin):
    """Authenticates users and validates their session tokens."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_hasher: PasswordHasherProtocol,
        token_issuer: TokenIssuerProtocol,
        session_integrity: SessionIntegrityService,
        audit_trail: AuditTrailService,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._users = user_repository
        self._hasher = password_hasher
        self._tokens = token_issuer
        self._session = session_integrity
        self._audit = audit_trail
        self._time = time_authority
        self._init_logger(component="auth")

    def authenticate(self, username: str, password: str) -> IssuedToken:
        """Log a user in and start a new session.

        Raises:
            AuthenticationError: Unknown user or wrong password.
            AccountInactiveError: The account is inactive.
            AccountLockedError: The failed-login threshold was reached.
        """
        log = self._log_operation("authenticate", username=username)
        if not username or not username.strip() or not password:
            raise AuthenticationError("Invalid credentials")

        user = self._users.get_by_username(username.strip())
        if user is None:
            log.warning("authentication_unknown_user")
            raise AuthenticationError()

        if not user.active:
            log.warning("authentication_inactive_account", user_id=user.id)
            raise AccountInactiveError(user.username)

        threshold = self._session.lockout_threshold
        if user.is_locked(threshold):
            log.warning("authentication_locked_account", user_id=user.id)
            raise AccountLockedError(user.username, user.failed_login_attempts)

        if not self._hasher.matches(password, user.password_hash):
            updated = self._session.on_authentication_failure(user)
            if updated.is_locked(threshold):
                raise AccountLockedError(
                    updated.username, updated.failed_login_attempts
                )
            raise AuthenticationError()

        issued = self._tokens.issue(user)
        self._users.save(user.start_session(issued.token_id, self._time.utcnow()))
        self._audit.record(user.id, "LOGIN")
        log.info("authentication_succeeded", user_id=user.id)
        return issued

    def validate_token(self, token: str) -> User:
        """Return the active user owning a current, valid token."""
        if not token or not token.strip():
            raise AuthenticationError("Token is required")
        if self._tokens.is_invalidated(token):
            raise TokenRevokedError()

        claims = self._tokens.verify(token)
        user = self._users.get(claims.user_id)
        if user is None:
            raise AuthenticationError("Token owner no longer exists")
        if not user.active:
            raise AccountInactiveError(user.username)
        if user.current_token_id != claims.token_id:
            raise TokenRevokedError("Token is not the current session")
        return user

    def authenticate_request(
        self, token: str, claimed_user_id: int | None = None
    ) -> User:
        """Validate a bearer token and resolve the acting user.

        Args:
            token: Bearer token.
            claimed_user_id: Identity the request claims to act as, if any.

        Raises:
            IdentityMismatchError: If a non-admin token claims another user.
        """
        owner = self.validate_token(token)
        if claimed_user_id is None:
            return owner
        assert owner.id is not None
        return self._session.resolve_actor(claimed_user_id, owner.id)

    def logout(self, user_id: int, token: str) -> None:
        """Revoke the token and end the user's current session."""
        if not token or not token.strip():
            raise AuthenticationError("Token is required")
        self._tokens.invalidate(token)
        user = self._users.get(user_id)
        if user is not None:
            self._users.save(user.invalidate_session())
        self._audit.record(user_id, "LOGOUT")
        self._log_operation("logout", user_id=user_id).info("logout_completed")
