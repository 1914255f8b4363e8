"""Unit tests for password hashers and the system clock."""

from datetime import timezone

import pytest

from festival.infrastructure.adapters.security import PasslibPasswordHasher
from festival.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)
from festival.infrastructure.stubs import PasswordHasherStub


@pytest.fixture(params=["passlib", "stub"])
def hasher(request):
    if request.param == "passlib":
        return PasslibPasswordHasher(schemes=("pbkdf2_sha256",))
    return PasswordHasherStub()


class TestPasswordHashers:
    def test_hash_verifies(self, hasher) -> None:
        hashed = hasher.hash("Str0ng!Pass")
        assert hashed != "Str0ng!Pass"
        assert hasher.matches("Str0ng!Pass", hashed)
        assert not hasher.matches("Str0ng!Pasz", hashed)

    def test_hashes_are_salted(self, hasher) -> None:
        assert hasher.hash("Str0ng!Pass") != hasher.hash("Str0ng!Pass")

    def test_malformed_hash_does_not_match(self, hasher) -> None:
        assert not hasher.matches("Str0ng!Pass", "not-a-hash")

    def test_passlib_rejects_stub_hashes(self) -> None:
        stub_hash = PasswordHasherStub().hash("Str0ng!Pass")
        passlib = PasslibPasswordHasher(schemes=("pbkdf2_sha256",))
        assert not passlib.matches("Str0ng!Pass", stub_hash)


class TestSystemTimeAuthority:
    def test_times_are_utc_aware(self) -> None:
        clock = SystemTimeAuthority()
        assert clock.now().tzinfo is timezone.utc
        assert clock.utcnow().tzinfo is timezone.utc
