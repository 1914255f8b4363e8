"""Audit log port."""

from __future__ import annotations

from typing import Protocol

from festival.domain.models.audit_entry import AuditEntry


class AuditLogProtocol(Protocol):
    """Append-only audit trail."""

    def record(self, entry: AuditEntry) -> AuditEntry:
        """Append an entry; returns it with its assigned id."""
        ...

    def list_entries(
        self,
        actor_id: int | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> tuple[list[AuditEntry], int]:
        """List entries newest first, optionally for a single actor."""
        ...
