"""Read-side screening queries with role-aware visibility.

A screening is public once its program is ANNOUNCED and it is SCHEDULED.
Programmers of the program, the submitter and the assigned staff handler
see it in any state.
"""

from __future__ import annotations

from datetime import date

from festival.application.dtos.page import Page
from festival.application.dtos.search import ScreeningSearchCriteria, ScreeningSort
from festival.application.ports.program_repository import ProgramRepositoryProtocol
from festival.application.ports.screening_repository import (
    ScreeningRepositoryProtocol,
)
from festival.application.services.base import LoggingMixin
from festival.config.festival_config import PaginationConfig
from festival.domain.errors.authorization import AuthorizationError
from festival.domain.errors.validation import NotFoundError, ValidationError
from festival.domain.models.program import Program, ProgramState
from festival.domain.models.screening import Screening, ScreeningState


def _words(query: str | None) -> list[str]:
    return (query or "").strip().lower().split()


def _contains_all(value: str | None, words: list[str]) -> bool:
    if not words:
        return True
    if value is None:
        return False
    haystack = value.lower()
    return all(word in haystack for word in words)


def _lower(value: str | None) -> str:
    return (value or "").lower()


def _timetable_key(screening: Screening) -> tuple:
    # Unscheduled screenings sort first
    return (screening.scheduled_on or date.min, _lower(screening.title))


def _genre_key(screening: Screening) -> tuple:
    return (_lower(screening.genre), _lower(screening.title))


class ScreeningQueryService(LoggingMixin):
    """View, search and list screenings."""

    def __init__(
        self,
        screening_repository: ScreeningRepositoryProtocol,
        program_repository: ProgramRepositoryProtocol,
        pagination: PaginationConfig | None = None,
    ) -> None:
        self._screenings = screening_repository
        self._programs = program_repository
        self._pagination = pagination or PaginationConfig()
        self._init_logger(component="screenings")

    @staticmethod
    def is_public(program: Program, screening: Screening) -> bool:
        return (
            program.state is ProgramState.ANNOUNCED
            and screening.state is ScreeningState.SCHEDULED
        )

    def can_view(
        self, actor_id: int | None, program: Program, screening: Screening
    ) -> bool:
        if actor_id is not None and (
            program.is_programmer(actor_id)
            or screening.is_owner(actor_id)
            or (screening.is_assigned_to(actor_id) and program.is_staff(actor_id))
        ):
            return True
        return self.is_public(program, screening)

    def _load_program(self, program_id: int) -> Program:
        program = self._programs.get(program_id)
        if program is None:
            raise NotFoundError("program", program_id)
        return program

    def view_screening(self, actor_id: int | None, screening_id: int) -> Screening:
        """Return a screening the actor may see.

        Raises:
            NotFoundError: Unknown screening.
            AuthorizationError: Screening is not visible to the actor.
        """
        screening = self._screenings.get(screening_id)
        if screening is None:
            raise NotFoundError("screening", screening_id)
        program = self._load_program(screening.program_id)
        if not self.can_view(actor_id, program, screening):
            raise AuthorizationError(
                "Screening not available", actor_id=actor_id, action="view_screening"
            )
        return screening

    def search_in_program(
        self,
        actor_id: int | None,
        program_id: int,
        criteria: ScreeningSearchCriteria,
        offset: int | None = None,
        limit: int | None = None,
    ) -> Page[Screening]:
        """Filter, sort and then page the screenings of one program."""
        if (
            criteria.scheduled_from is not None
            and criteria.scheduled_to is not None
            and criteria.scheduled_to < criteria.scheduled_from
        ):
            raise ValidationError("scheduled_to must be on or after scheduled_from")
        safe_offset, safe_limit = self._pagination.clamp(offset, limit)
        program = self._load_program(program_id)

        title_words = _words(criteria.title)
        genre_words = _words(criteria.genre)
        candidates = self._all_for_program(program_id, criteria.state)
        matches = [
            s
            for s in candidates
            if self.can_view(actor_id, program, s)
            and _contains_all(s.title, title_words)
            and _contains_all(s.genre, genre_words)
            and (
                criteria.scheduled_from is None
                or (s.scheduled_on is not None and s.scheduled_on >= criteria.scheduled_from)
            )
            and (
                criteria.scheduled_to is None
                or (s.scheduled_on is not None and s.scheduled_on <= criteria.scheduled_to)
            )
        ]
        key = _timetable_key if criteria.sort is ScreeningSort.TIMETABLE else _genre_key
        matches.sort(key=key)
        self._log_operation(
            "search_in_program", actor_id=actor_id, program_id=program_id
        ).debug("screening_search_completed", matches=len(matches))
        return Page.slice(matches, safe_offset, safe_limit)

    def _all_for_program(
        self, program_id: int, state: ScreeningState | None
    ) -> list[Screening]:
        collected: list[Screening] = []
        batch = self._pagination.max_page_size
        while True:
            page, total = self._screenings.list_by_program(
                program_id, state=state, offset=len(collected), limit=batch
            )
            collected.extend(page)
            if not page or len(collected) >= total:
                return collected

    def list_for_submitter(
        self,
        submitter_id: int,
        state: ScreeningState | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> Page[Screening]:
        """The submitter's own screenings."""
        safe_offset, safe_limit = self._pagination.clamp(offset, limit)
        items, total = self._screenings.list_by_submitter(
            submitter_id, state=state, offset=safe_offset, limit=safe_limit
        )
        return Page(items=items, total=total, offset=safe_offset, limit=safe_limit)

    def list_for_handler(
        self,
        handler_id: int,
        offset: int | None = None,
        limit: int | None = None,
    ) -> Page[Screening]:
        """Screenings assigned to a staff handler."""
        safe_offset, safe_limit = self._pagination.clamp(offset, limit)
        items, total = self._screenings.list_by_handler(
            handler_id, offset=safe_offset, limit=safe_limit
        )
        return Page(items=items, total=total, offset=safe_offset, limit=safe_limit)
