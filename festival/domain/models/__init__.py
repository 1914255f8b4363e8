"""Domain models for the festival workflow."""

from festival.domain.models.audit_entry import AuditEntry
from festival.domain.models.program import (
    PROGRAM_TRANSITION_MATRIX,
    Program,
    ProgramState,
)
from festival.domain.models.role_set import RoleSet
from festival.domain.models.screening import (
    SCREENING_TERMINAL_STATES,
    SCREENING_TRANSITION_MATRIX,
    Screening,
    ScreeningState,
)
from festival.domain.models.user import (
    ROLE_CAPABILITIES,
    BaseRole,
    Capability,
    User,
)

__all__ = [
    "AuditEntry",
    "BaseRole",
    "Capability",
    "PROGRAM_TRANSITION_MATRIX",
    "Program",
    "ProgramState",
    "ROLE_CAPABILITIES",
    "RoleSet",
    "SCREENING_TERMINAL_STATES",
    "SCREENING_TRANSITION_MATRIX",
    "Screening",
    "ScreeningState",
    "User",
]
