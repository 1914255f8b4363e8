"""Role-aware program view DTO."""

from dataclasses import dataclass

from festival.domain.models.program import Program


@dataclass(frozen=True)
class ProgramView:
    """A program as seen by one actor.

    Attributes:
        program: The program.
        full: Whether the actor may see membership and internal details.
    """

    program: Program
    full: bool
