"""Relationship-based authorization checks.

Every check is a pure function that raises before any mutation happens.
Checks compare the actor against the aggregate (owner, program
programmer, program staff, assigned handler), never against a global
role string. Global role permissions go through require_capability().

Use-cases apply checks in a fixed order:
    load -> actor checks -> phase/state checks -> domain op -> save
"""

from __future__ import annotations

from collections.abc import Iterable

from festival.domain.errors.authorization import AuthorizationError
from festival.domain.errors.state import PhaseMismatchError
from festival.domain.models.program import Program, ProgramState
from festival.domain.models.screening import Screening, ScreeningState
from festival.domain.models.user import Capability, User


def require_owner(actor_id: int, screening: Screening, action: str = "act") -> None:
    """Actor must be the screening's submitter."""
    if not screening.is_owner(actor_id):
        raise AuthorizationError(
            f"Only the submitter can {action} this screening",
            actor_id=actor_id,
            action=action,
        )


def require_programmer(actor_id: int, program: Program, action: str = "act") -> None:
    """Actor must be a programmer of the program."""
    if not program.is_programmer(actor_id):
        raise AuthorizationError(
            f"Only a PROGRAMMER of program {program.id} can {action}",
            actor_id=actor_id,
            action=action,
        )


def require_staff(actor_id: int, program: Program, action: str = "act") -> None:
    """Actor must be staff of the program."""
    if not program.is_staff(actor_id):
        raise AuthorizationError(
            f"Only STAFF of program {program.id} can {action}",
            actor_id=actor_id,
            action=action,
        )


def require_assigned_handler(
    actor_id: int,
    program: Program,
    screening: Screening,
    action: str = "review",
) -> None:
    """Actor must be staff of the program AND the screening's assigned handler."""
    require_staff(actor_id, program, action)
    if not screening.is_assigned_to(actor_id):
        raise AuthorizationError(
            f"Only the assigned handler can {action} this screening",
            actor_id=actor_id,
            action=action,
        )


def require_not_programmer(
    actor_id: int, program: Program, action: str = "submit"
) -> None:
    """Programmers may not submit screenings to their own program."""
    if program.is_programmer(actor_id):
        raise AuthorizationError(
            f"A PROGRAMMER cannot {action} screenings in their own program",
            actor_id=actor_id,
            action=action,
        )


def require_owner_or_creator(
    actor_id: int,
    program: Program,
    screening: Screening,
    action: str = "withdraw",
) -> None:
    """Actor must be the submitter or the program creator."""
    if not (screening.is_owner(actor_id) or program.creator_id == actor_id):
        raise AuthorizationError(
            f"Only the submitter or the program creator can {action} this screening",
            actor_id=actor_id,
            action=action,
        )


def require_capability(user: User, capability: Capability) -> None:
    """User's base role must grant capability."""
    if not user.has_capability(capability):
        raise AuthorizationError(
            f"Role {user.role.value} lacks {capability.value}",
            actor_id=user.id,
            action=capability.value.lower(),
        )


def require_phase(
    program: Program,
    phases: Iterable[ProgramState],
    action: str,
) -> None:
    """Program must be in one of phases.

    Raises:
        PhaseMismatchError: With mismatched == "program".
    """
    allowed = list(phases)
    if program.state not in allowed:
        raise PhaseMismatchError(
            mismatched="program",
            action=action,
            actual=program.state,
            required=allowed,
        )


def require_screening_state(
    screening: Screening,
    states: Iterable[ScreeningState],
    action: str,
) -> None:
    """Screening must be in one of states.

    Raises:
        PhaseMismatchError: With mismatched == "screening".
    """
    allowed = list(states)
    if screening.state not in allowed:
        raise PhaseMismatchError(
            mismatched="screening",
            action=action,
            actual=screening.state,
            required=allowed,
        )


def require_dual_state(
    program: Program,
    phases: Iterable[ProgramState],
    screening: Screening,
    states: Iterable[ScreeningState],
    action: str,
) -> None:
    """Program phase AND screening state must both match.

    The program side is checked first, so a request failing both sides
    reports the program.
    """
    require_phase(program, phases, action)
    require_screening_state(screening, states, action)
