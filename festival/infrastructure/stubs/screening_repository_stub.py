"""In-memory screening repository stub."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable

from festival.application.ports.screening_repository import (
    ScreeningRepositoryProtocol,
)
from festival.domain.models.screening import Screening, ScreeningState


class ScreeningRepositoryStub(ScreeningRepositoryProtocol):
    """In-memory implementation of ScreeningRepositoryProtocol.

    List methods order by id ascending and return (page, total).
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._screenings: dict[int, Screening] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get(self, screening_id: int) -> Screening | None:
        return self._screenings.get(screening_id)

    def save(self, screening: Screening) -> Screening:
        with self._lock:
            if screening.id is None:
                screening = screening.with_id(next(self._ids))
            self._screenings[screening.id] = screening  # type: ignore[index]
            return screening

    def delete(self, screening_id: int) -> None:
        with self._lock:
            self._screenings.pop(screening_id, None)

    def _page(
        self,
        predicate: Callable[[Screening], bool],
        offset: int,
        limit: int,
    ) -> tuple[list[Screening], int]:
        matching = sorted(
            (s for s in self._screenings.values() if predicate(s)),
            key=lambda s: s.id or 0,
        )
        return matching[offset : offset + limit], len(matching)

    def list_by_program(
        self,
        program_id: int,
        state: ScreeningState | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[Screening], int]:
        return self._page(
            lambda s: s.program_id == program_id
            and (state is None or s.state is state),
            offset,
            limit,
        )

    def list_by_submitter(
        self,
        submitter_id: int,
        state: ScreeningState | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[Screening], int]:
        return self._page(
            lambda s: s.submitter_id == submitter_id
            and (state is None or s.state is state),
            offset,
            limit,
        )

    def list_by_handler(
        self,
        handler_id: int,
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[Screening], int]:
        return self._page(lambda s: s.handler_id == handler_id, offset, limit)

    def exists_for_program(self, program_id: int) -> bool:
        return any(s.program_id == program_id for s in self._screenings.values())

    def exists_by_program_and_submitter(
        self, program_id: int, submitter_id: int
    ) -> bool:
        return any(
            s.program_id == program_id and s.submitter_id == submitter_id
            for s in self._screenings.values()
        )

    def clear(self) -> None:
        """Remove every stored screening (test helper)."""
        with self._lock:
            self._screenings.clear()
            self._ids = itertools.count(1)
