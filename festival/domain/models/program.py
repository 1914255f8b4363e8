"""Program aggregate: a festival run and its lifecycle.

A Program moves through a strictly linear phase sequence:

    CREATED -> SUBMISSION -> ASSIGNMENT -> REVIEW -> SCHEDULING
            -> FINAL_PUBLICATION -> DECISION -> ANNOUNCED

Two construction paths exist. Program.create() is the guarded business
path used by use-cases. Program.rehydrate() rebuilds an aggregate from
storage in any state; it checks structural invariants only and never
applies lifecycle guards.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum

from festival.domain.errors.state import ProgramLockedError, StaffSetFrozenError
from festival.domain.errors.validation import ValidationError
from festival.domain.models.role_set import RoleSet


class ProgramState(Enum):
    """Phase in the program lifecycle.

    States:
        CREATED: Programmers and staff are assembled.
        SUBMISSION: Submitters may submit screenings.
        ASSIGNMENT: Programmers assign staff handlers.
        REVIEW: Assigned handlers score screenings.
        SCHEDULING: Submitters approve reviewed screenings.
        FINAL_PUBLICATION: Submitters final-submit approved screenings.
        DECISION: Programmers schedule or reject.
        ANNOUNCED: Published; the program is locked.
    """

    CREATED = "CREATED"
    SUBMISSION = "SUBMISSION"
    ASSIGNMENT = "ASSIGNMENT"
    REVIEW = "REVIEW"
    SCHEDULING = "SCHEDULING"
    FINAL_PUBLICATION = "FINAL_PUBLICATION"
    DECISION = "DECISION"
    ANNOUNCED = "ANNOUNCED"

    def is_terminal(self) -> bool:
        return self is ProgramState.ANNOUNCED

    def valid_transitions(self) -> frozenset[ProgramState]:
        return PROGRAM_TRANSITION_MATRIX.get(self, frozenset())


# Each phase has exactly one successor; ANNOUNCED has none.
PROGRAM_TRANSITION_MATRIX: dict[ProgramState, frozenset[ProgramState]] = {
    ProgramState.CREATED: frozenset({ProgramState.SUBMISSION}),
    ProgramState.SUBMISSION: frozenset({ProgramState.ASSIGNMENT}),
    ProgramState.ASSIGNMENT: frozenset({ProgramState.REVIEW}),
    ProgramState.REVIEW: frozenset({ProgramState.SCHEDULING}),
    ProgramState.SCHEDULING: frozenset({ProgramState.FINAL_PUBLICATION}),
    ProgramState.FINAL_PUBLICATION: frozenset({ProgramState.DECISION}),
    ProgramState.DECISION: frozenset({ProgramState.ANNOUNCED}),
    ProgramState.ANNOUNCED: frozenset(),
}


def _require_text(value: str | None, field_name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"Program {field_name} is required", field=field_name)
    return value.strip()


def _require_dates(start_date: date | None, end_date: date | None) -> None:
    if start_date is None or end_date is None:
        raise ValidationError("Program start_date and end_date are required")
    if end_date < start_date:
        raise ValidationError(
            "Program end_date cannot be before start_date", field="end_date"
        )


@dataclass(frozen=True, eq=True)
class Program:
    """A festival run with its role sets and lifecycle phase.

    Attributes:
        id: Store-assigned identifier; None until first saved.
        name: Unique, trimmed display name.
        description: Trimmed description.
        start_date: First festival day.
        end_date: Last festival day (not before start_date).
        creator_id: User who created the program.
        created_at: Creation timestamp (UTC).
        state: Current lifecycle phase.
        roles: Programmer and staff membership.
    """

    name: str
    description: str
    start_date: date
    end_date: date
    creator_id: int
    created_at: datetime
    state: ProgramState = field(default=ProgramState.CREATED)
    roles: RoleSet | None = field(default=None)
    id: int | None = field(default=None)

    def __post_init__(self) -> None:
        """Fill in and validate the role set."""
        if self.roles is None:
            object.__setattr__(self, "roles", RoleSet.for_creator(self.creator_id))
        elif self.roles.creator_id != self.creator_id:
            raise ValidationError("Role set belongs to a different creator")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        start_date: date,
        end_date: date,
        creator_id: int,
        created_at: datetime,
    ) -> Program:
        """Create a new program in CREATED with the creator as programmer.

        Raises:
            ValidationError: If any field is missing or dates are inverted.
        """
        clean_name = _require_text(name, "name")
        clean_description = _require_text(description, "description")
        _require_dates(start_date, end_date)
        return cls(
            name=clean_name,
            description=clean_description,
            start_date=start_date,
            end_date=end_date,
            creator_id=creator_id,
            created_at=created_at,
        )

    @classmethod
    def rehydrate(
        cls,
        id: int,
        name: str,
        description: str,
        start_date: date,
        end_date: date,
        creator_id: int,
        created_at: datetime,
        state: ProgramState,
        programmers: Iterable[int] | None = None,
        staff: Iterable[int] | None = None,
    ) -> Program:
        """Rebuild a program from storage in any state.

        Raises:
            InvariantViolationError: If stored programmers and staff overlap.
        """
        return cls(
            id=id,
            name=name,
            description=description,
            start_date=start_date,
            end_date=end_date,
            creator_id=creator_id,
            created_at=created_at,
            state=state,
            roles=RoleSet.rehydrate(creator_id, programmers, staff),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def programmers(self) -> frozenset[int]:
        return self._roles.programmers

    @property
    def staff(self) -> frozenset[int]:
        return self._roles.staff

    @property
    def _roles(self) -> RoleSet:
        assert self.roles is not None
        return self.roles

    def is_programmer(self, user_id: int | None) -> bool:
        return self._roles.is_programmer(user_id)

    def is_staff(self, user_id: int | None) -> bool:
        return self._roles.is_staff(user_id)

    def is_member(self, user_id: int | None) -> bool:
        return self._roles.is_member(user_id)

    def is_locked(self) -> bool:
        return self.state.is_terminal()

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _ensure_not_locked(self) -> None:
        if self.is_locked():
            raise ProgramLockedError(self.id)

    def _ensure_staff_mutable(self) -> None:
        self._ensure_not_locked()
        if self.state is not ProgramState.CREATED:
            raise StaffSetFrozenError(self.id, self.state)

    # ------------------------------------------------------------------
    # Guarded mutations (each returns a new Program)
    # ------------------------------------------------------------------

    def with_id(self, program_id: int) -> Program:
        """Return a copy carrying the store-assigned id."""
        return replace(self, id=program_id)

    def update_info(
        self,
        name: str,
        description: str,
        start_date: date,
        end_date: date,
    ) -> Program:
        """Return a copy with new descriptive fields.

        Raises:
            ProgramLockedError: If the program is announced.
            ValidationError: If any field is missing or dates are inverted.
        """
        self._ensure_not_locked()
        clean_name = _require_text(name, "name")
        clean_description = _require_text(description, "description")
        _require_dates(start_date, end_date)
        return replace(
            self,
            name=clean_name,
            description=clean_description,
            start_date=start_date,
            end_date=end_date,
        )

    def add_programmer(self, user_id: int) -> Program:
        self._ensure_not_locked()
        return replace(self, roles=self._roles.add_programmer(user_id))

    def remove_programmer(self, user_id: int) -> Program:
        self._ensure_not_locked()
        return replace(self, roles=self._roles.remove_programmer(user_id))

    def add_staff(self, user_id: int) -> Program:
        self._ensure_staff_mutable()
        return replace(self, roles=self._roles.add_staff(user_id))

    def remove_staff(self, user_id: int) -> Program:
        self._ensure_staff_mutable()
        return replace(self, roles=self._roles.remove_staff(user_id))

    def with_state(self, new_state: ProgramState) -> Program:
        """Return a copy moved to new_state.

        Raises:
            ForbiddenTransitionError: If new_state is not the single successor.
        """
        # Import here to avoid circular dependency
        from festival.domain.services.program_state_machine import (
            ProgramStateMachine,
        )

        return replace(
            self, state=ProgramStateMachine.transition(self.state, new_state)
        )
