"""Unit tests for the Program aggregate."""

from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

from festival.domain.errors import (
    ForbiddenTransitionError,
    ProgramLockedError,
    StaffSetFrozenError,
    StateError,
    ValidationError,
)
from festival.domain.models.program import Program, ProgramState

CREATED_AT = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def program() -> Program:
    return Program.create(
        name="  Harbour Shorts  ",
        description=" Short films by the sea ",
        start_date=date(2026, 5, 1),
        end_date=date(2026, 5, 3),
        creator_id=1,
        created_at=CREATED_AT,
    ).with_id(10)


class TestProgramCreate:
    """Tests for Program.create validation."""

    def test_create_trims_and_defaults(self, program: Program) -> None:
        assert program.name == "Harbour Shorts"
        assert program.description == "Short films by the sea"
        assert program.state is ProgramState.CREATED
        assert program.programmers == frozenset({1})
        assert program.staff == frozenset()

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, name) -> None:
        with pytest.raises(ValidationError):
            Program.create(name, "d", date(2026, 5, 1), date(2026, 5, 2), 1, CREATED_AT)

    def test_inverted_dates_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Program.create("n", "d", date(2026, 5, 2), date(2026, 5, 1), 1, CREATED_AT)
        assert exc_info.value.field == "end_date"

    def test_single_day_program_allowed(self) -> None:
        program = Program.create("n", "d", date(2026, 5, 1), date(2026, 5, 1), 1, CREATED_AT)
        assert program.start_date == program.end_date


class TestProgramMembership:
    """Tests for phase-gated membership changes."""

    def test_add_staff_in_created(self, program: Program) -> None:
        assert program.add_staff(2).is_staff(2)

    def test_staff_frozen_after_created(self, program: Program) -> None:
        """Staff cannot be added or removed once the program left CREATED."""
        staffed = program.add_staff(2).with_state(ProgramState.SUBMISSION)
        with pytest.raises(StaffSetFrozenError):
            staffed.add_staff(3)
        with pytest.raises(StaffSetFrozenError):
            staffed.remove_staff(2)

    def test_staff_frozen_is_state_error(self, program: Program) -> None:
        submission = program.with_state(ProgramState.SUBMISSION)
        with pytest.raises(StateError):
            submission.add_staff(3)

    def test_programmers_still_mutable_after_created(self, program: Program) -> None:
        submission = program.with_state(ProgramState.SUBMISSION)
        assert submission.add_programmer(5).is_programmer(5)

    def test_announced_program_is_locked(self, program: Program) -> None:
        announced = replace(program, state=ProgramState.ANNOUNCED)
        assert announced.is_locked()
        with pytest.raises(ProgramLockedError):
            announced.add_programmer(5)
        with pytest.raises(ProgramLockedError):
            announced.update_info("x", "y", date(2026, 5, 1), date(2026, 5, 2))


class TestProgramLifecycle:
    """Tests for with_state."""

    def test_single_step_forward(self, program: Program) -> None:
        assert program.with_state(ProgramState.SUBMISSION).state is ProgramState.SUBMISSION

    def test_skip_is_forbidden(self, program: Program) -> None:
        with pytest.raises(ForbiddenTransitionError) as exc_info:
            program.with_state(ProgramState.REVIEW)
        assert exc_info.value.entity == "program"

    def test_backward_is_forbidden(self, program: Program) -> None:
        submission = program.with_state(ProgramState.SUBMISSION)
        with pytest.raises(ForbiddenTransitionError):
            submission.with_state(ProgramState.CREATED)

    def test_rehydrate_keeps_state_and_members(self) -> None:
        program = Program.rehydrate(
            id=3,
            name="n",
            description="d",
            start_date=date(2026, 5, 1),
            end_date=date(2026, 5, 2),
            creator_id=1,
            created_at=CREATED_AT,
            state=ProgramState.REVIEW,
            programmers=[2],
            staff=[4],
        )
        assert program.state is ProgramState.REVIEW
        assert program.programmers == frozenset({1, 2})
        assert program.is_staff(4)
