"""In-memory program repository stub.

Stores programs in a dict guarded by a threading.Lock. Ids are allocated
atomically on first save. NOT suitable for production.
"""

from __future__ import annotations

import itertools
import threading
from datetime import date

from festival.application.ports.program_repository import ProgramRepositoryProtocol
from festival.domain.models.program import Program, ProgramState


class ProgramRepositoryStub(ProgramRepositoryProtocol):
    """In-memory implementation of ProgramRepositoryProtocol.

    Attributes:
        _programs: Mapping of program id to Program.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._programs: dict[int, Program] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get(self, program_id: int) -> Program | None:
        return self._programs.get(program_id)

    def save(self, program: Program) -> Program:
        """Insert or replace a program, assigning an id on first save."""
        with self._lock:
            if program.id is None:
                program = program.with_id(next(self._ids))
            self._programs[program.id] = program  # type: ignore[index]
            return program

    def delete(self, program_id: int) -> None:
        with self._lock:
            self._programs.pop(program_id, None)

    def exists_by_name(self, name: str) -> bool:
        wanted = name.strip().lower()
        return any(p.name.lower() == wanted for p in self._programs.values())

    def search(
        self,
        name: str | None = None,
        state: ProgramState | None = None,
        start_from: date | None = None,
        start_to: date | None = None,
    ) -> list[Program]:
        """Filter by name fragment (case-insensitive), state and start window."""
        fragment = name.strip().lower() if name and name.strip() else None
        matching = [
            p
            for p in self._programs.values()
            if (fragment is None or fragment in p.name.lower())
            and (state is None or p.state is state)
            and (start_from is None or p.start_date >= start_from)
            and (start_to is None or p.start_date <= start_to)
        ]
        matching.sort(key=lambda p: p.id or 0)
        return matching

    def exists_with_member(self, user_id: int) -> bool:
        return any(p.is_member(user_id) for p in self._programs.values())

    def clear(self) -> None:
        """Remove every stored program (test helper)."""
        with self._lock:
            self._programs.clear()
            self._ids = itertools.count(1)
