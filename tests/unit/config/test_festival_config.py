"""Unit tests for the festival configuration dataclasses.

Covers defaults, environment variable loading, validation and page clamping.
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from festival.config.festival_config import (
    DEFAULT_FESTIVAL_CONFIG,
    DEV_TOKEN_SECRET,
    TEST_FESTIVAL_CONFIG,
    FestivalConfig,
    PaginationConfig,
    ReviewConfig,
    SecurityConfig,
)


class TestDefaults:
    def test_review_range(self) -> None:
        """Scores run from 0 to 10 inclusive by default."""
        assert (ReviewConfig().min_score, ReviewConfig().max_score) == (0, 10)

    def test_security_defaults(self) -> None:
        config = SecurityConfig()
        assert config.lockout_threshold == 3
        assert config.token_algorithm == "HS256"
        assert config.password_schemes == ("bcrypt",)
        assert config.token_secret == DEV_TOKEN_SECRET

    def test_default_aggregate(self) -> None:
        assert DEFAULT_FESTIVAL_CONFIG.environment == "development"
        assert DEFAULT_FESTIVAL_CONFIG.pagination.max_page_size == 200

    def test_test_config_uses_fast_hashing(self) -> None:
        assert TEST_FESTIVAL_CONFIG.security.password_schemes == ("pbkdf2_sha256",)
        assert TEST_FESTIVAL_CONFIG.environment == "test"


class TestFromEnvironment:
    def test_defaults_without_env(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert FestivalConfig.from_environment() == FestivalConfig()

    def test_loads_overrides(self) -> None:
        env = {
            "FESTIVAL_SCORE_MAX": "5",
            "FESTIVAL_LOCKOUT_THRESHOLD": "5",
            "FESTIVAL_TOKEN_SECRET": "s3cret",
            "FESTIVAL_PASSWORD_SCHEMES": "bcrypt, pbkdf2_sha256",
            "FESTIVAL_MAX_PAGE_SIZE": "100",
            "ENVIRONMENT": "production",
        }
        with patch.dict(os.environ, env, clear=True):
            config = FestivalConfig.from_environment()
        assert config.review.max_score == 5
        assert config.security.lockout_threshold == 5
        assert config.security.token_secret == "s3cret"
        assert config.security.password_schemes == ("bcrypt", "pbkdf2_sha256")
        assert config.pagination.max_page_size == 100
        assert config.environment == "production"

    def test_invalid_integer_falls_back(self) -> None:
        with patch.dict(os.environ, {"FESTIVAL_LOCKOUT_THRESHOLD": "many"}, clear=True):
            assert SecurityConfig.from_environment().lockout_threshold == 3

    def test_blank_string_falls_back(self) -> None:
        with patch.dict(os.environ, {"FESTIVAL_TOKEN_SECRET": "  "}, clear=True):
            assert SecurityConfig.from_environment().token_secret == DEV_TOKEN_SECRET


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_score": -1},
            {"min_score": 5, "max_score": 5},
        ],
    )
    def test_bad_review_range(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            ReviewConfig(**kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"lockout_threshold": 0},
            {"token_ttl_seconds": 0},
            {"token_secret": ""},
            {"password_schemes": ()},
        ],
    )
    def test_bad_security(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            SecurityConfig(**kwargs)

    def test_default_page_larger_than_max(self) -> None:
        with pytest.raises(ValueError):
            PaginationConfig(default_page_size=20, max_page_size=10)


class TestClamp:
    @pytest.mark.parametrize(
        ("offset", "limit", "expected"),
        [
            (None, None, (0, 10)),
            (-3, 5, (0, 5)),
            (4, 0, (4, 1)),
            (0, 500, (0, 50)),
        ],
    )
    def test_clamp(self, offset, limit, expected) -> None:
        pagination = PaginationConfig(default_page_size=10, max_page_size=50)
        assert pagination.clamp(offset, limit) == expected
