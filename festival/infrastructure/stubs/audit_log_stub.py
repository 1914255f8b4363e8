"""In-memory audit log stub."""

from __future__ import annotations

import itertools
import threading
from dataclasses import replace

from festival.application.ports.audit_log import AuditLogProtocol
from festival.domain.models.audit_entry import AuditEntry


class AuditLogStub(AuditLogProtocol):
    """Append-only in-memory audit trail."""

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def record(self, entry: AuditEntry) -> AuditEntry:
        with self._lock:
            stored = replace(entry, id=next(self._ids))
            self._entries.append(stored)
            return stored

    def list_entries(
        self,
        actor_id: int | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[AuditEntry], int]:
        with self._lock:
            matching = [
                e for e in self._entries if actor_id is None or e.actor_id == actor_id
            ]
        matching.reverse()
        return matching[offset : offset + limit], len(matching)

    def actions(self) -> list[str]:
        """All recorded action codes in insertion order (test inspection)."""
        with self._lock:
            return [e.action for e in self._entries]
