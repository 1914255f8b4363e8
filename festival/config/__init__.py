"""Configuration module for the festival workflow.

Available Configurations:
- ReviewConfig: Review score bounds
- SecurityConfig: Lockout, tokens and password hashing
- PaginationConfig: Page size limits
- FestivalConfig: All of the above
"""

from festival.config.festival_config import (
    DEFAULT_FESTIVAL_CONFIG,
    TEST_FESTIVAL_CONFIG,
    FestivalConfig,
    PaginationConfig,
    ReviewConfig,
    SecurityConfig,
)

__all__ = [
    "FestivalConfig",
    "ReviewConfig",
    "SecurityConfig",
    "PaginationConfig",
    "DEFAULT_FESTIVAL_CONFIG",
    "TEST_FESTIVAL_CONFIG",
]
