"""Audit trail entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, eq=True)
class AuditEntry:
    """A record of who did what to which target, and when.

    Attributes:
        actor_id: User performing the action (None for anonymous).
        action: Upper-case action code, e.g. LOGIN or CHANGE_PROGRAM_STATE.
        target: Free-text description of the affected object.
        recorded_at: When the action happened (UTC).
        id: Store-assigned identifier.
    """

    actor_id: int | None
    action: str
    target: str | None
    recorded_at: datetime
    id: int | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "actor_id": self.actor_id,
            "action": self.action,
            "target": self.target,
            "recorded_at": self.recorded_at.isoformat(),
        }
