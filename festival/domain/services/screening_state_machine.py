"""Stateless screening lifecycle transition function."""

from __future__ import annotations

from festival.domain.errors.state import ForbiddenTransitionError
from festival.domain.models.screening import (
    SCREENING_TRANSITION_MATRIX,
    ScreeningState,
)


class ScreeningStateMachine:
    """Validates screening transitions against the transition matrix."""

    @staticmethod
    def can_transition(current: ScreeningState, requested: ScreeningState) -> bool:
        return requested in SCREENING_TRANSITION_MATRIX.get(current, frozenset())

    @staticmethod
    def transition(
        current: ScreeningState, requested: ScreeningState
    ) -> ScreeningState:
        """Return requested if the matrix permits it.

        Raises:
            ForbiddenTransitionError: If the matrix does not permit it.
        """
        if not ScreeningStateMachine.can_transition(current, requested):
            raise ForbiddenTransitionError(
                entity="screening",
                from_state=current,
                to_state=requested,
                allowed_transitions=list(current.valid_transitions()),
            )
        return requested
