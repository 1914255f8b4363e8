"""Stateless program lifecycle transition function."""

from __future__ import annotations

from festival.domain.errors.state import ForbiddenTransitionError
from festival.domain.models.program import PROGRAM_TRANSITION_MATRIX, ProgramState


class ProgramStateMachine:
    """Validates program phase transitions against the linear chain.

    The machine holds no state. transition() returns the new state for the
    caller to persist.
    """

    @staticmethod
    def can_transition(current: ProgramState, requested: ProgramState) -> bool:
        return requested in PROGRAM_TRANSITION_MATRIX.get(current, frozenset())

    @staticmethod
    def successor_of(state: ProgramState) -> ProgramState | None:
        """Return the unique successor of state, or None for ANNOUNCED."""
        successors = PROGRAM_TRANSITION_MATRIX.get(state, frozenset())
        return next(iter(successors), None)

    @staticmethod
    def transition(current: ProgramState, requested: ProgramState) -> ProgramState:
        """Return requested if it is the successor of current.

        Raises:
            ForbiddenTransitionError: For skips, reversals, self-loops and
                anything leaving ANNOUNCED.
        """
        if not ProgramStateMachine.can_transition(current, requested):
            raise ForbiddenTransitionError(
                entity="program",
                from_state=current,
                to_state=requested,
                allowed_transitions=list(current.valid_transitions()),
            )
        return requested
