"""Test helpers for festival tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    advance_to: Step a program through its phases

Usage:
    from tests.helpers import FakeTimeAuthority
"""

from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.lifecycle import advance_to

__all__ = ["FakeTimeAuthority", "advance_to"]
