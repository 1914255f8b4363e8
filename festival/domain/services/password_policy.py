"""Password strength policy."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from festival.domain.errors.validation import ValidationError

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"\d")
_SPECIAL = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class PasswordPolicy:
    """Configurable password strength rules.

    Attributes:
        min_length: Minimum number of characters.
        require_upper: Require an uppercase letter.
        require_lower: Require a lowercase letter.
        require_digit: Require a digit.
        require_special: Require a non-alphanumeric character.
        max_repeat: Longest allowed run of one repeated character.
        max_ascending: Longest allowed run of consecutive code points (1234, abcd).
        banned: Lower-case common passwords that are always refused.
    """

    min_length: int = 10
    require_upper: bool = True
    require_lower: bool = True
    require_digit: bool = True
    require_special: bool = True
    max_repeat: int = 3
    max_ascending: int = 4
    banned: frozenset[str] = field(
        default_factory=lambda: frozenset({"password", "123456", "qwerty"})
    )

    def violations(
        self,
        raw_password: str | None,
        username: str | None = None,
        full_name: str | None = None,
    ) -> list[str]:
        """Return every rule the password breaks, empty when it is acceptable."""
        if raw_password is None or not raw_password.strip():
            return ["Password cannot be blank"]

        found: list[str] = []
        password = raw_password
        lowered = password.lower()

        if len(password) < self.min_length:
            found.append(f"Minimum length: {self.min_length}")
        if self.require_upper and not _UPPER.search(password):
            found.append("At least one uppercase letter required")
        if self.require_lower and not _LOWER.search(password):
            found.append("At least one lowercase letter required")
        if self.require_digit and not _DIGIT.search(password):
            found.append("At least one digit required")
        if self.require_special and not _SPECIAL.search(password):
            found.append("At least one special character required")
        if self.max_repeat > 0 and _longest_run(password, _same) > self.max_repeat:
            found.append("Too many repeated characters in a row")
        if (
            self.max_ascending > 0
            and _longest_run(password, _ascending) > self.max_ascending
        ):
            found.append("Contains long ascending sequence")
        if lowered in self.banned:
            found.append("Password is too common")
        if username and username.lower() in lowered:
            found.append("Password must not contain the username")
        if full_name and any(
            len(part) >= 3 and part in lowered for part in full_name.lower().split()
        ):
            found.append("Password must not contain parts of your name")
        return found

    def ensure_valid(
        self,
        raw_password: str | None,
        username: str | None = None,
        full_name: str | None = None,
    ) -> None:
        """Raise ValidationError listing every violation."""
        found = self.violations(raw_password, username, full_name)
        if found:
            raise ValidationError(
                "; ".join(found), field="password", violations=found
            )

    def is_strong(self, raw_password: str | None) -> bool:
        return not self.violations(raw_password)


def _same(previous: str, current: str) -> bool:
    return current == previous


def _ascending(previous: str, current: str) -> bool:
    return ord(current) == ord(previous) + 1


def _longest_run(text: str, links) -> int:
    longest = run = 1 if text else 0
    for previous, current in zip(text, text[1:]):
        run = run + 1 if links(previous, current) else 1
        longest = max(longest, run)
    return longest


DEFAULT_PASSWORD_POLICY = PasswordPolicy()
