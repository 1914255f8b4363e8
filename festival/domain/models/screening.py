"""Screening aggregate: a content submission inside a Program.

State Machine:
    CREATED -> SUBMITTED (submitter submits a complete draft)
    SUBMITTED -> REVIEWED (assigned handler scores it)
    REVIEWED -> APPROVED | REJECTED
    APPROVED -> FINAL_SUBMITTED | SCHEDULED | REJECTED
    FINAL_SUBMITTED -> SCHEDULED | REJECTED

Terminal States:
    SCHEDULED, REJECTED

Every guarded operation returns a new Screening and raises when called
from a state it does not accept. Nothing is silently ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum

from festival.domain.errors.state import StateError
from festival.domain.errors.validation import ScoreOutOfRangeError, ValidationError

SCORE_MIN = 0
SCORE_MAX = 10


class ScreeningState(Enum):
    """State in the screening lifecycle."""

    CREATED = "CREATED"
    SUBMITTED = "SUBMITTED"
    REVIEWED = "REVIEWED"
    APPROVED = "APPROVED"
    FINAL_SUBMITTED = "FINAL_SUBMITTED"
    SCHEDULED = "SCHEDULED"
    REJECTED = "REJECTED"

    def is_terminal(self) -> bool:
        return self in SCREENING_TERMINAL_STATES

    def valid_transitions(self) -> frozenset[ScreeningState]:
        return SCREENING_TRANSITION_MATRIX.get(self, frozenset())


SCREENING_TERMINAL_STATES: frozenset[ScreeningState] = frozenset(
    {ScreeningState.SCHEDULED, ScreeningState.REJECTED}
)

SCREENING_TRANSITION_MATRIX: dict[ScreeningState, frozenset[ScreeningState]] = {
    ScreeningState.CREATED: frozenset({ScreeningState.SUBMITTED}),
    ScreeningState.SUBMITTED: frozenset({ScreeningState.REVIEWED}),
    ScreeningState.REVIEWED: frozenset(
        {ScreeningState.APPROVED, ScreeningState.REJECTED}
    ),
    # APPROVED may skip final submission; DECISION auto-rejects those left behind
    ScreeningState.APPROVED: frozenset(
        {
            ScreeningState.FINAL_SUBMITTED,
            ScreeningState.SCHEDULED,
            ScreeningState.REJECTED,
        }
    ),
    ScreeningState.FINAL_SUBMITTED: frozenset(
        {ScreeningState.SCHEDULED, ScreeningState.REJECTED}
    ),
    ScreeningState.SCHEDULED: frozenset(),
    ScreeningState.REJECTED: frozenset(),
}

# States from which the submitter (or program creator) may withdraw
WITHDRAWABLE_STATES: frozenset[ScreeningState] = frozenset(
    {ScreeningState.CREATED, ScreeningState.SUBMITTED}
)


def _clean(value: str | None) -> str | None:
    return None if value is None else value.strip()


@dataclass(frozen=True, eq=True)
class Screening:
    """A content submission and its review record.

    Attributes:
        id: Store-assigned identifier; None until first saved.
        program_id: Owning program (immutable).
        submitter_id: Owner of the screening (immutable).
        title: Title; required before submission.
        genre: Free-text genre.
        description: Free-text description.
        created_at: Draft creation time.
        state: Current lifecycle state.
        handler_id: Assigned staff handler.
        review_score: Handler's score.
        review_comments: Handler's comments.
        rejection_reason: Reason recorded on rejection.
        room: Room set when scheduled.
        scheduled_on: Date set when scheduled.
        submitted_at: When submitted.
        reviewed_at: When reviewed.
        final_submitted_at: When final-submitted.
    """

    program_id: int
    submitter_id: int
    title: str | None
    genre: str | None
    description: str | None
    created_at: datetime
    state: ScreeningState = field(default=ScreeningState.CREATED)
    handler_id: int | None = field(default=None)
    review_score: int | None = field(default=None)
    review_comments: str | None = field(default=None)
    rejection_reason: str | None = field(default=None)
    room: str | None = field(default=None)
    scheduled_on: date | None = field(default=None)
    submitted_at: datetime | None = field(default=None)
    reviewed_at: datetime | None = field(default=None)
    final_submitted_at: datetime | None = field(default=None)
    id: int | None = field(default=None)

    @classmethod
    def new_draft(
        cls,
        program_id: int,
        submitter_id: int,
        title: str | None,
        genre: str | None,
        description: str | None,
        created_at: datetime,
    ) -> Screening:
        """Create a new draft in CREATED."""
        return cls(
            program_id=program_id,
            submitter_id=submitter_id,
            title=_clean(title),
            genre=_clean(genre),
            description=_clean(description),
            created_at=created_at,
        )

    @classmethod
    def rehydrate(cls, **stored: object) -> Screening:
        """Rebuild a screening from stored fields in any state."""
        return cls(**stored)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_owner(self, user_id: int | None) -> bool:
        return user_id is not None and user_id == self.submitter_id

    def is_assigned_to(self, user_id: int | None) -> bool:
        return user_id is not None and user_id == self.handler_id

    def is_complete_for_submission(self) -> bool:
        return bool(self.title and self.title.strip())

    def is_withdrawable(self) -> bool:
        return self.state in WITHDRAWABLE_STATES

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _transition(self, new_state: ScreeningState) -> ScreeningState:
        # Import here to avoid circular dependency
        from festival.domain.services.screening_state_machine import (
            ScreeningStateMachine,
        )

        return ScreeningStateMachine.transition(self.state, new_state)

    # ------------------------------------------------------------------
    # Guarded mutations
    # ------------------------------------------------------------------

    def with_id(self, screening_id: int) -> Screening:
        return replace(self, id=screening_id)

    def update_draft(
        self,
        title: str | None,
        genre: str | None,
        description: str | None,
    ) -> Screening:
        """Return a copy with new draft fields.

        Raises:
            StateError: If the screening has left CREATED.
        """
        if self.state is not ScreeningState.CREATED:
            raise StateError(
                f"Only CREATED screenings can be updated, screening is {self.state.value}"
            )
        return replace(
            self,
            title=_clean(title),
            genre=_clean(genre),
            description=_clean(description),
        )

    def submit(self, at: datetime) -> Screening:
        """Move CREATED -> SUBMITTED.

        Raises:
            ForbiddenTransitionError: If not in CREATED.
            ValidationError: If the title is missing.
        """
        self._transition(ScreeningState.SUBMITTED)
        if not self.is_complete_for_submission():
            raise ValidationError("Screening title is required to submit", field="title")
        return replace(self, state=ScreeningState.SUBMITTED, submitted_at=at)

    def assign_handler(self, handler_id: int | None) -> Screening:
        """Record the staff handler for a SUBMITTED screening.

        Raises:
            StateError: If not in SUBMITTED.
            ValidationError: If handler_id is None.
        """
        if self.state is not ScreeningState.SUBMITTED:
            raise StateError(
                f"Handler assignment requires SUBMITTED, screening is {self.state.value}"
            )
        if handler_id is None:
            raise ValidationError("Handler id is required", field="handler_id")
        return replace(self, handler_id=handler_id)

    def review(
        self,
        score: int,
        comments: str | None,
        at: datetime,
        min_score: int = SCORE_MIN,
        max_score: int = SCORE_MAX,
    ) -> Screening:
        """Move SUBMITTED -> REVIEWED with a score.

        Raises:
            ForbiddenTransitionError: If not in SUBMITTED.
            StateError: If no handler is assigned.
            ScoreOutOfRangeError: If score is outside [min_score, max_score].
        """
        self._transition(ScreeningState.REVIEWED)
        if self.handler_id is None:
            raise StateError("No handler assigned")
        if score < min_score or score > max_score:
            raise ScoreOutOfRangeError(score, min_score, max_score)
        return replace(
            self,
            state=ScreeningState.REVIEWED,
            review_score=score,
            review_comments=(comments or "").strip(),
            reviewed_at=at,
        )

    def approve(self) -> Screening:
        """Move REVIEWED -> APPROVED."""
        return replace(self, state=self._transition(ScreeningState.APPROVED))

    def reject(self, reason: str | None) -> Screening:
        """Move REVIEWED, APPROVED or FINAL_SUBMITTED -> REJECTED.

        Raises:
            ForbiddenTransitionError: From any other state.
            ValidationError: If reason is blank.
        """
        self._transition(ScreeningState.REJECTED)
        if reason is None or not reason.strip():
            raise ValidationError("Rejection reason is required", field="reason")
        return replace(
            self, state=ScreeningState.REJECTED, rejection_reason=reason.strip()
        )

    def final_submit(self, at: datetime) -> Screening:
        """Move APPROVED -> FINAL_SUBMITTED."""
        return replace(
            self,
            state=self._transition(ScreeningState.FINAL_SUBMITTED),
            final_submitted_at=at,
        )

    def schedule(self, on: date | None, room: str | None) -> Screening:
        """Move APPROVED or FINAL_SUBMITTED -> SCHEDULED.

        Raises:
            ForbiddenTransitionError: From any other state.
            ValidationError: If date or room is missing.
        """
        self._transition(ScreeningState.SCHEDULED)
        if on is None:
            raise ValidationError("Schedule date is required", field="date")
        if room is None or not room.strip():
            raise ValidationError("Room is required", field="room")
        return replace(
            self, state=ScreeningState.SCHEDULED, scheduled_on=on, room=room.strip()
        )

    def ensure_withdrawable(self) -> None:
        """Raise StateError unless the screening is CREATED or SUBMITTED."""
        if not self.is_withdrawable():
            raise StateError(
                f"Only CREATED or SUBMITTED screenings can be withdrawn, "
                f"screening is {self.state.value}"
            )
