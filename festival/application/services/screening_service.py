"""Screening workflow use-cases.

Each action checks, in order: the actor's relationship to the program or
screening, then the program phase, then the screening state, and only
then applies the domain operation.

| action        | actor                    | program phase            |
|---------------|--------------------------|--------------------------|
| create        | not a programmer         | not ANNOUNCED            |
| update draft  | submitter                | not ANNOUNCED            |
| submit        | submitter, not programmer| SUBMISSION               |
| assign        | programmer               | ASSIGNMENT               |
| review        | assigned staff handler   | REVIEW                   |
| approve       | submitter                | SCHEDULING               |
| reject        | programmer               | SCHEDULING or DECISION   |
| final submit  | submitter                | FINAL_PUBLICATION        |
| schedule      | programmer               | DECISION                 |
| withdraw      | submitter or creator     | any                      |
"""

from __future__ import annotations

from datetime import date

from festival.application.ports.program_repository import ProgramRepositoryProtocol
from festival.application.ports.screening_repository import (
    ScreeningRepositoryProtocol,
)
from festival.application.ports.time_authority import TimeAuthorityProtocol
from festival.application.services.audit_trail_service import AuditTrailService
from festival.application.services.base import LoggingMixin
from festival.config.festival_config import ReviewConfig
from festival.domain.errors.state import ProgramLockedError, StateError
from festival.domain.errors.validation import NotFoundError, ValidationError
from festival.domain.models.program import Program, ProgramState
from festival.domain.models.screening import Screening, ScreeningState
from festival.domain.services import authorization_guard as guard

_REJECTABLE_STATES = (
    ScreeningState.REVIEWED,
    ScreeningState.APPROVED,
    ScreeningState.FINAL_SUBMITTED,
)


class ScreeningService(LoggingMixin):
    """Moves screenings through their lifecycle under authorization guards."""

    def __init__(
        self,
        screening_repository: ScreeningRepositoryProtocol,
        program_repository: ProgramRepositoryProtocol,
        audit_trail: AuditTrailService,
        time_authority: TimeAuthorityProtocol,
        review_config: ReviewConfig | None = None,
    ) -> None:
        self._screenings = screening_repository
        self._programs = program_repository
        self._audit = audit_trail
        self._time = time_authority
        self._review = review_config or ReviewConfig()
        self._init_logger(component="screenings")

    def _load_program(self, program_id: int) -> Program:
        program = self._programs.get(program_id)
        if program is None:
            raise NotFoundError("program", program_id)
        return program

    def _load(self, screening_id: int) -> tuple[Screening, Program]:
        screening = self._screenings.get(screening_id)
        if screening is None:
            raise NotFoundError("screening", screening_id)
        return screening, self._load_program(screening.program_id)

    def _commit(self, actor_id: int, screening: Screening, action: str) -> Screening:
        saved = self._screenings.save(screening)
        self._audit.record(actor_id, action, f"screening {saved.id}")
        self._log_operation(
            action.lower(),
            actor_id=actor_id,
            screening_id=saved.id,
            program_id=saved.program_id,
        ).info("screening_transitioned", state=saved.state.value)
        return saved

    def create_screening(
        self,
        actor_id: int,
        program_id: int,
        title: str | None,
        genre: str | None,
        description: str | None,
    ) -> Screening:
        """Create a draft owned by the actor.

        Raises:
            AuthorizationError: Actor is a programmer of the program.
            ProgramLockedError: Program is announced.
        """
        program = self._load_program(program_id)
        guard.require_not_programmer(actor_id, program, "create")
        if program.is_locked():
            raise ProgramLockedError(program_id)
        draft = Screening.new_draft(
            program_id=program_id,
            submitter_id=actor_id,
            title=title,
            genre=genre,
            description=description,
            created_at=self._time.utcnow(),
        )
        return self._commit(actor_id, draft, "CREATE_SCREENING")

    def update_screening(
        self,
        actor_id: int,
        screening_id: int,
        title: str | None,
        genre: str | None,
        description: str | None,
    ) -> Screening:
        """Edit a CREATED draft (submitter only)."""
        screening, program = self._load(screening_id)
        guard.require_owner(actor_id, screening, "update")
        if program.is_locked():
            raise ProgramLockedError(program.id)
        updated = screening.update_draft(title, genre, description)
        return self._commit(actor_id, updated, "UPDATE_SCREENING")

    def submit(self, actor_id: int, screening_id: int) -> Screening:
        """CREATED -> SUBMITTED while the program accepts submissions."""
        screening, program = self._load(screening_id)
        guard.require_owner(actor_id, screening, "submit")
        guard.require_not_programmer(actor_id, program, "submit")
        guard.require_dual_state(
            program,
            [ProgramState.SUBMISSION],
            screening,
            [ScreeningState.CREATED],
            "submit",
        )
        return self._commit(
            actor_id, screening.submit(self._time.utcnow()), "SUBMIT_SCREENING"
        )

    def assign_handler(
        self, actor_id: int, screening_id: int, handler_id: int | None
    ) -> Screening:
        """Assign a staff member of the program as handler.

        Raises:
            ValidationError: Handler missing, not staff, or the submitter.
            StateError: A handler is already assigned.
        """
        screening, program = self._load(screening_id)
        guard.require_programmer(actor_id, program, "assign handlers")
        guard.require_dual_state(
            program,
            [ProgramState.ASSIGNMENT],
            screening,
            [ScreeningState.SUBMITTED],
            "assign a handler",
        )
        if handler_id is None:
            raise ValidationError("Handler id is required", field="handler_id")
        if not program.is_staff(handler_id):
            raise ValidationError(
                f"User {handler_id} is not STAFF of program {program.id}",
                field="handler_id",
            )
        if handler_id == screening.submitter_id:
            raise ValidationError(
                "The submitter cannot handle their own screening", field="handler_id"
            )
        if screening.handler_id is not None:
            raise StateError(
                f"Screening {screening_id} already has handler {screening.handler_id}"
            )
        return self._commit(
            actor_id, screening.assign_handler(handler_id), "ASSIGN_HANDLER"
        )

    def review(
        self,
        actor_id: int,
        screening_id: int,
        score: int,
        comments: str | None = None,
    ) -> Screening:
        """SUBMITTED -> REVIEWED by the assigned staff handler.

        Raises:
            AuthorizationError: Actor is not the assigned staff handler.
            PhaseMismatchError: Program is not in REVIEW.
            ScoreOutOfRangeError: Score outside the configured range.
        """
        screening, program = self._load(screening_id)
        guard.require_assigned_handler(actor_id, program, screening, "review")
        guard.require_dual_state(
            program,
            [ProgramState.REVIEW],
            screening,
            [ScreeningState.SUBMITTED],
            "review",
        )
        reviewed = screening.review(
            score,
            comments,
            self._time.utcnow(),
            min_score=self._review.min_score,
            max_score=self._review.max_score,
        )
        return self._commit(actor_id, reviewed, "REVIEW_SCREENING")

    def approve(self, actor_id: int, screening_id: int) -> Screening:
        """REVIEWED -> APPROVED by the submitter during SCHEDULING."""
        screening, program = self._load(screening_id)
        guard.require_owner(actor_id, screening, "approve")
        guard.require_dual_state(
            program,
            [ProgramState.SCHEDULING],
            screening,
            [ScreeningState.REVIEWED],
            "approve",
        )
        return self._commit(actor_id, screening.approve(), "APPROVE_SCREENING")

    def reject(self, actor_id: int, screening_id: int, reason: str | None) -> Screening:
        """Reject a reviewed, approved or final-submitted screening (programmers)."""
        screening, program = self._load(screening_id)
        guard.require_programmer(actor_id, program, "reject screenings")
        guard.require_dual_state(
            program,
            [ProgramState.SCHEDULING, ProgramState.DECISION],
            screening,
            _REJECTABLE_STATES,
            "reject",
        )
        return self._commit(actor_id, screening.reject(reason), "REJECT_SCREENING")

    def final_submit(self, actor_id: int, screening_id: int) -> Screening:
        """APPROVED -> FINAL_SUBMITTED by the submitter during FINAL_PUBLICATION."""
        screening, program = self._load(screening_id)
        guard.require_owner(actor_id, screening, "final-submit")
        guard.require_dual_state(
            program,
            [ProgramState.FINAL_PUBLICATION],
            screening,
            [ScreeningState.APPROVED],
            "final-submit",
        )
        return self._commit(
            actor_id,
            screening.final_submit(self._time.utcnow()),
            "FINAL_SUBMIT_SCREENING",
        )

    def schedule(
        self,
        actor_id: int,
        screening_id: int,
        on: date | None,
        room: str | None,
    ) -> Screening:
        """FINAL_SUBMITTED -> SCHEDULED by a programmer during DECISION."""
        screening, program = self._load(screening_id)
        guard.require_programmer(actor_id, program, "schedule screenings")
        guard.require_dual_state(
            program,
            [ProgramState.DECISION],
            screening,
            [ScreeningState.FINAL_SUBMITTED],
            "schedule",
        )
        return self._commit(
            actor_id, screening.schedule(on, room), "SCHEDULE_SCREENING"
        )

    def withdraw(self, actor_id: int, screening_id: int) -> None:
        """Delete a CREATED or SUBMITTED screening (submitter or program creator)."""
        screening, program = self._load(screening_id)
        guard.require_owner_or_creator(actor_id, program, screening, "withdraw")
        screening.ensure_withdrawable()

        self._screenings.delete(screening_id)
        self._audit.record(actor_id, "WITHDRAW_SCREENING", f"screening {screening_id}")
        self._log_operation(
            "withdraw", actor_id=actor_id, screening_id=screening_id
        ).info("screening_withdrawn")
