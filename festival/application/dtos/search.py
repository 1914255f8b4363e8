"""Search criteria DTOs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from festival.domain.models.program import ProgramState
from festival.domain.models.screening import ScreeningState


@dataclass(frozen=True)
class ProgramSearchCriteria:
    """Program search filters; every filter is optional.

    Attributes:
        name: Case-insensitive fragment of the program name.
        state: Exact lifecycle phase.
        start_from: Earliest start date (inclusive).
        start_to: Latest start date (inclusive).
    """

    name: str | None = None
    state: ProgramState | None = None
    start_from: date | None = None
    start_to: date | None = None


class ScreeningSort(Enum):
    """Ordering of screening search results.

    TIMETABLE: scheduled date (unscheduled first), then title.
    GENRE: genre, then title.
    """

    TIMETABLE = "TIMETABLE"
    GENRE = "GENRE"


@dataclass(frozen=True)
class ScreeningSearchCriteria:
    """Screening search filters within one program.

    Word queries use AND semantics: every whitespace-separated word must
    appear (case-insensitive) in the field.

    Attributes:
        title: Words that must all appear in the title.
        genre: Words that must all appear in the genre.
        state: Exact screening state.
        scheduled_from: Earliest scheduled date (inclusive).
        scheduled_to: Latest scheduled date (inclusive).
        sort: Result ordering.
    """

    title: str | None = None
    genre: str | None = None
    state: ScreeningState | None = None
    scheduled_from: date | None = None
    scheduled_to: date | None = None
    sort: ScreeningSort = ScreeningSort.TIMETABLE
