"""Program repository port.

Repositories store and load aggregates; they never apply lifecycle
guards. Services load, guard, mutate and save.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

from festival.domain.models.program import Program, ProgramState


class ProgramRepositoryProtocol(Protocol):
    """Protocol for program persistence.

    Methods:
        get: Load by id, None when absent
        save: Insert or replace; assigns an id on first save
        delete: Remove by id
        exists_by_name: Case-insensitive name uniqueness check
        search: Filter by name fragment, state and start-date window
        exists_with_member: Whether any program lists the user as member
    """

    def get(self, program_id: int) -> Program | None:
        """Retrieve a program by id."""
        ...

    def save(self, program: Program) -> Program:
        """Persist a program.

        Returns:
            The stored program, carrying its id.
        """
        ...

    def delete(self, program_id: int) -> None:
        """Remove a program. Missing ids are ignored."""
        ...

    def exists_by_name(self, name: str) -> bool:
        """Check whether a program with this name (case-insensitive) exists."""
        ...

    def search(
        self,
        name: str | None = None,
        state: ProgramState | None = None,
        start_from: date | None = None,
        start_to: date | None = None,
    ) -> list[Program]:
        """Return every program matching all supplied filters."""
        ...

    def exists_with_member(self, user_id: int) -> bool:
        """Check whether the user is a programmer or staff of any program."""
        ...
