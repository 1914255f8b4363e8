"""Screening repository port."""

from __future__ import annotations

from typing import Protocol

from festival.domain.models.screening import Screening, ScreeningState


class ScreeningRepositoryProtocol(Protocol):
    """Protocol for screening persistence.

    list_* methods return (page, total) where total counts every match
    before paging.
    """

    def get(self, screening_id: int) -> Screening | None:
        """Retrieve a screening by id."""
        ...

    def save(self, screening: Screening) -> Screening:
        """Persist a screening; assigns an id on first save."""
        ...

    def delete(self, screening_id: int) -> None:
        """Remove a screening. Missing ids are ignored."""
        ...

    def list_by_program(
        self,
        program_id: int,
        state: ScreeningState | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[Screening], int]:
        """List screenings of a program, optionally filtered by state."""
        ...

    def list_by_submitter(
        self,
        submitter_id: int,
        state: ScreeningState | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[Screening], int]:
        """List screenings owned by a submitter."""
        ...

    def list_by_handler(
        self,
        handler_id: int,
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[Screening], int]:
        """List screenings assigned to a staff handler."""
        ...

    def exists_for_program(self, program_id: int) -> bool:
        """Check whether any screening references the program."""
        ...

    def exists_by_program_and_submitter(
        self, program_id: int, submitter_id: int
    ) -> bool:
        """Check whether the user submitted any screening to the program."""
        ...
