"""Authentication errors (HTTP 401).

Raised when a caller cannot be authenticated: bad credentials, unusable
accounts, or tokens that are malformed, expired or revoked.
"""

from __future__ import annotations

from festival.domain.exceptions import FestivalError


class AuthenticationError(FestivalError):
    """Raised when the caller's identity cannot be established."""

    ERROR_CODE = "AUTHENTICATION_FAILED"
    HTTP_STATUS = 401

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)


class AccountInactiveError(AuthenticationError):
    """Raised when an inactive account attempts to authenticate."""

    ERROR_CODE = "ACCOUNT_INACTIVE"

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Account is inactive: {username}")


class AccountLockedError(AuthenticationError):
    """Raised when an account has reached the failed-login threshold."""

    ERROR_CODE = "ACCOUNT_LOCKED"

    def __init__(self, username: str, failed_attempts: int) -> None:
        self.username = username
        self.failed_attempts = failed_attempts
        super().__init__(
            f"Account is locked after {failed_attempts} failed attempts: {username}"
        )


class InvalidTokenError(AuthenticationError):
    """Raised when a token cannot be decoded or its signature is wrong."""

    ERROR_CODE = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class ExpiredTokenError(AuthenticationError):
    """Raised when a token's expiry has passed."""

    ERROR_CODE = "TOKEN_EXPIRED"

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message)


class TokenRevokedError(AuthenticationError):
    """Raised when a token was revoked or superseded by a newer session."""

    ERROR_CODE = "TOKEN_REVOKED"

    def __init__(self, message: str = "Token has been revoked") -> None:
        super().__init__(message)
