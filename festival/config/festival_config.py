"""Festival workflow configuration.

Frozen dataclasses with validation and environment overrides.

Environment Variables (Review):
- FESTIVAL_SCORE_MIN: Lowest review score (default: 0)
- FESTIVAL_SCORE_MAX: Highest review score (default: 10)

Environment Variables (Security):
- FESTIVAL_LOCKOUT_THRESHOLD: Failed logins before lockout (default: 3)
- FESTIVAL_TOKEN_TTL_SECONDS: Session token lifetime (default: 3600)
- FESTIVAL_TOKEN_SECRET: HMAC secret for session tokens
- FESTIVAL_TOKEN_ALGORITHM: JWT signing algorithm (default: HS256)
- FESTIVAL_PASSWORD_SCHEMES: Comma-separated passlib schemes (default: bcrypt)

Environment Variables (Pagination):
- FESTIVAL_DEFAULT_PAGE_SIZE: Page size when none is requested (default: 50)
- FESTIVAL_MAX_PAGE_SIZE: Largest allowed page (default: 200)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEV_TOKEN_SECRET = "festival-dev-secret-change-me"


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str_env(key: str, default: str) -> str:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class ReviewConfig:
    """Review score bounds (closed range).

    Attributes:
        min_score: Lowest accepted score.
        max_score: Highest accepted score.
    """

    min_score: int = 0
    max_score: int = 10

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.min_score < 0:
            raise ValueError(f"min_score must be non-negative, got {self.min_score}")
        if self.max_score <= self.min_score:
            raise ValueError(
                f"max_score ({self.max_score}) must be greater than "
                f"min_score ({self.min_score})"
            )

    @classmethod
    def from_environment(cls) -> "ReviewConfig":
        return cls(
            min_score=_get_int_env("FESTIVAL_SCORE_MIN", 0),
            max_score=_get_int_env("FESTIVAL_SCORE_MAX", 10),
        )


@dataclass(frozen=True)
class SecurityConfig:
    """Authentication and session settings.

    Attributes:
        lockout_threshold: Failed logins after which the account is locked.
        token_ttl_seconds: Lifetime of issued session tokens.
        token_secret: HMAC secret for signing tokens.
        token_algorithm: JWT algorithm.
        password_schemes: passlib schemes, first one used for new hashes.
    """

    lockout_threshold: int = 3
    token_ttl_seconds: int = 3600
    token_secret: str = DEV_TOKEN_SECRET
    token_algorithm: str = "HS256"
    password_schemes: tuple[str, ...] = ("bcrypt",)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.lockout_threshold < 1:
            raise ValueError(
                f"lockout_threshold must be positive, got {self.lockout_threshold}"
            )
        if self.token_ttl_seconds < 1:
            raise ValueError(
                f"token_ttl_seconds must be positive, got {self.token_ttl_seconds}"
            )
        if not self.token_secret:
            raise ValueError("token_secret must not be empty")
        if not self.password_schemes:
            raise ValueError("password_schemes must name at least one scheme")

    @classmethod
    def from_environment(cls) -> "SecurityConfig":
        schemes = _get_str_env("FESTIVAL_PASSWORD_SCHEMES", "bcrypt")
        return cls(
            lockout_threshold=_get_int_env("FESTIVAL_LOCKOUT_THRESHOLD", 3),
            token_ttl_seconds=_get_int_env("FESTIVAL_TOKEN_TTL_SECONDS", 3600),
            token_secret=_get_str_env("FESTIVAL_TOKEN_SECRET", DEV_TOKEN_SECRET),
            token_algorithm=_get_str_env("FESTIVAL_TOKEN_ALGORITHM", "HS256"),
            password_schemes=tuple(
                s.strip() for s in schemes.split(",") if s.strip()
            ),
        )


@dataclass(frozen=True)
class PaginationConfig:
    """Paging limits for list and search operations."""

    default_page_size: int = 50
    max_page_size: int = 200

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_page_size < 1:
            raise ValueError(
                f"max_page_size must be positive, got {self.max_page_size}"
            )
        if not 1 <= self.default_page_size <= self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) must be between "
                f"1 and max_page_size ({self.max_page_size})"
            )

    def clamp(self, offset: int | None, limit: int | None) -> tuple[int, int]:
        """Normalize paging input: offset >= 0 and 1 <= limit <= max."""
        safe_offset = max(offset or 0, 0)
        requested = self.default_page_size if limit is None else limit
        safe_limit = min(max(requested, 1), self.max_page_size)
        return safe_offset, safe_limit

    @classmethod
    def from_environment(cls) -> "PaginationConfig":
        return cls(
            default_page_size=_get_int_env("FESTIVAL_DEFAULT_PAGE_SIZE", 50),
            max_page_size=_get_int_env("FESTIVAL_MAX_PAGE_SIZE", 200),
        )


@dataclass(frozen=True)
class FestivalConfig:
    """Aggregate of all festival settings."""

    review: ReviewConfig = ReviewConfig()
    security: SecurityConfig = SecurityConfig()
    pagination: PaginationConfig = PaginationConfig()
    environment: str = "development"

    @classmethod
    def from_environment(cls) -> "FestivalConfig":
        return cls(
            review=ReviewConfig.from_environment(),
            security=SecurityConfig.from_environment(),
            pagination=PaginationConfig.from_environment(),
            environment=_get_str_env("ENVIRONMENT", "development"),
        )


# Pre-defined configurations for common use cases

DEFAULT_FESTIVAL_CONFIG = FestivalConfig()

# Testing config: fast hashing and short-lived tokens
TEST_FESTIVAL_CONFIG = FestivalConfig(
    security=SecurityConfig(
        token_ttl_seconds=300,
        token_secret="test-secret",
        password_schemes=("pbkdf2_sha256",),
    ),
    pagination=PaginationConfig(default_page_size=10, max_page_size=50),
    environment="test",
)
