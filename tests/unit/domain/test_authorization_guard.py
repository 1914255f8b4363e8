"""Unit tests for relationship-based authorization checks."""

from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

from festival.domain.errors import AuthorizationError, PhaseMismatchError
from festival.domain.models.program import Program, ProgramState
from festival.domain.models.screening import Screening, ScreeningState
from festival.domain.models.user import BaseRole, Capability, User
from festival.domain.services import authorization_guard as guard

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)
CREATOR, STAFF, SUBMITTER, STRANGER = 1, 2, 3, 4


@pytest.fixture
def program() -> Program:
    return (
        Program.create("Fest", "desc", date(2026, 6, 1), date(2026, 6, 2), CREATOR, NOW)
        .with_id(1)
        .add_staff(STAFF)
    )


@pytest.fixture
def screening() -> Screening:
    return Screening.new_draft(1, SUBMITTER, "Title", None, None, NOW).with_id(1)


class TestActorChecks:
    def test_owner_passes_and_stranger_fails(self, screening: Screening) -> None:
        guard.require_owner(SUBMITTER, screening, "submit")
        with pytest.raises(AuthorizationError) as exc_info:
            guard.require_owner(STRANGER, screening, "submit")
        assert exc_info.value.action == "submit"

    def test_programmer(self, program: Program) -> None:
        guard.require_programmer(CREATOR, program)
        with pytest.raises(AuthorizationError):
            guard.require_programmer(STAFF, program)

    def test_staff(self, program: Program) -> None:
        guard.require_staff(STAFF, program)
        with pytest.raises(AuthorizationError):
            guard.require_staff(CREATOR, program)

    def test_assigned_handler_must_be_staff_and_assigned(
        self, program: Program, screening: Screening
    ) -> None:
        handled = replace(screening, state=ScreeningState.SUBMITTED, handler_id=STAFF)
        guard.require_assigned_handler(STAFF, program, handled)

        other_staff_program = program.add_staff(5)
        with pytest.raises(AuthorizationError, match="assigned handler"):
            guard.require_assigned_handler(5, other_staff_program, handled)

    def test_handler_no_longer_staff_fails(
        self, program: Program, screening: Screening
    ) -> None:
        handled = replace(screening, handler_id=9)
        with pytest.raises(AuthorizationError):
            guard.require_assigned_handler(9, program, handled)

    def test_not_programmer(self, program: Program) -> None:
        guard.require_not_programmer(SUBMITTER, program)
        with pytest.raises(AuthorizationError):
            guard.require_not_programmer(CREATOR, program)

    def test_owner_or_creator(self, program: Program, screening: Screening) -> None:
        guard.require_owner_or_creator(SUBMITTER, program, screening)
        guard.require_owner_or_creator(CREATOR, program, screening)
        with pytest.raises(AuthorizationError):
            guard.require_owner_or_creator(STAFF, program, screening)

    def test_capability(self) -> None:
        admin = User("admin1", "hash", "Ada", role=BaseRole.ADMIN, id=1)
        member = User("member", "hash", "Mia", role=BaseRole.USER, id=2)
        guard.require_capability(admin, Capability.VIEW_AUDIT_LOG)
        with pytest.raises(AuthorizationError):
            guard.require_capability(member, Capability.VIEW_AUDIT_LOG)


class TestPhaseChecks:
    def test_phase_mismatch_names_program(self, program: Program) -> None:
        with pytest.raises(PhaseMismatchError) as exc_info:
            guard.require_phase(program, [ProgramState.REVIEW], "review")
        assert exc_info.value.mismatched == "program"
        assert exc_info.value.actual is ProgramState.CREATED

    def test_state_mismatch_names_screening(self, screening: Screening) -> None:
        with pytest.raises(PhaseMismatchError) as exc_info:
            guard.require_screening_state(screening, [ScreeningState.SUBMITTED], "review")
        assert exc_info.value.mismatched == "screening"

    def test_dual_state_reports_program_first(
        self, program: Program, screening: Screening
    ) -> None:
        """When both sides are wrong the program is reported."""
        with pytest.raises(PhaseMismatchError) as exc_info:
            guard.require_dual_state(
                program,
                [ProgramState.REVIEW],
                screening,
                [ScreeningState.SUBMITTED],
                "review",
            )
        assert exc_info.value.mismatched == "program"

    def test_dual_state_reports_screening_when_program_matches(
        self, program: Program, screening: Screening
    ) -> None:
        with pytest.raises(PhaseMismatchError) as exc_info:
            guard.require_dual_state(
                program,
                [ProgramState.CREATED],
                screening,
                [ScreeningState.SUBMITTED],
                "review",
            )
        assert exc_info.value.mismatched == "screening"
        assert exc_info.value.to_dict()["mismatched"] == "screening"
