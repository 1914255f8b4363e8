"""Time Authority Protocol - injectable clock.

All services that need timestamps MUST inject a TimeAuthorityProtocol
implementation instead of calling datetime.now() directly. Tests inject
FakeTimeAuthority from tests/helpers/fake_time_authority.py.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for the clock.

    Example usage:
        class MyService:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def process(self) -> None:
                now = self._time.utcnow()  # NOT datetime.now()
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time, timezone-aware (UTC recommended)."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return the current UTC time, timezone-aware."""
        ...

    def today(self) -> date:
        """Return the current UTC calendar date."""
        return self.utcnow().date()
