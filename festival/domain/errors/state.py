"""Lifecycle state errors (HTTP 409).

StateError is raised when an operation is attempted in the wrong lifecycle
state. ForbiddenTransitionError is the narrower case where the requested
transition is absent from a transition table.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from festival.domain.exceptions import FestivalError


class StateError(FestivalError):
    """Raised when an aggregate is in the wrong state for an operation."""

    ERROR_CODE = "INVALID_STATE"
    HTTP_STATUS = 409


class ForbiddenTransitionError(StateError):
    """Raised when a transition is not present in the transition matrix.

    Attributes:
        entity: "program" or "screening".
        from_state: Current state.
        to_state: Requested state.
        allowed_transitions: States reachable from the current state.
    """

    ERROR_CODE = "FORBIDDEN_TRANSITION"

    def __init__(
        self,
        entity: str,
        from_state: Enum,
        to_state: Enum,
        allowed_transitions: list[Enum] | None = None,
    ) -> None:
        self.entity = entity
        self.from_state = from_state
        self.to_state = to_state
        self.allowed_transitions = allowed_transitions or []

        allowed_str = (
            f" Valid transitions: {sorted(s.value for s in self.allowed_transitions)}"
            if self.allowed_transitions
            else ""
        )
        super().__init__(
            f"Invalid {entity} transition: {from_state.value} -> {to_state.value}.{allowed_str}"
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["from_state"] = self.from_state.value
        result["to_state"] = self.to_state.value
        return result


class PhaseMismatchError(StateError):
    """Raised when the program phase or screening state does not permit an action.

    Attributes:
        mismatched: Which side failed, "program" or "screening".
        action: The action that was attempted.
        actual: The actual state on the mismatched side.
        required: The states that would have been accepted.
    """

    ERROR_CODE = "PHASE_MISMATCH"

    def __init__(
        self,
        mismatched: str,
        action: str,
        actual: Enum,
        required: list[Enum],
    ) -> None:
        self.mismatched = mismatched
        self.action = action
        self.actual = actual
        self.required = required
        super().__init__(
            f"Cannot {action}: {mismatched} is {actual.value}, requires one of "
            f"{[s.value for s in required]}"
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["mismatched"] = self.mismatched
        result["actual"] = self.actual.value
        return result


class StaffSetFrozenError(StateError):
    """Raised when staff membership changes after a program left CREATED."""

    ERROR_CODE = "STAFF_SET_FROZEN"

    def __init__(self, program_id: int | None, state: Enum) -> None:
        self.program_id = program_id
        self.state = state
        super().__init__(
            f"Staff of program {program_id} is frozen in state {state.value}"
        )


class ProgramLockedError(StateError):
    """Raised when an ANNOUNCED program is modified."""

    ERROR_CODE = "PROGRAM_LOCKED"

    def __init__(self, program_id: int | None) -> None:
        self.program_id = program_id
        super().__init__(f"Program {program_id} is announced and locked")
