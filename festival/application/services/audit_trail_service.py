"""Audit trail service.

Records who did what to which target. Reading the trail requires the
VIEW_AUDIT_LOG capability.
"""

from __future__ import annotations

from festival.application.dtos.page import Page
from festival.application.ports.audit_log import AuditLogProtocol
from festival.application.ports.time_authority import TimeAuthorityProtocol
from festival.application.services.base import LoggingMixin
from festival.domain.models.audit_entry import AuditEntry
from festival.domain.models.user import Capability, User
from festival.domain.services.authorization_guard import require_capability


class AuditTrailService(LoggingMixin):
    """Writes and reads audit entries."""

    def __init__(
        self,
        audit_log: AuditLogProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._audit_log = audit_log
        self._time = time_authority
        self._init_logger(component="audit")

    def record(
        self, actor_id: int | None, action: str, target: str | None = None
    ) -> AuditEntry:
        entry = self._audit_log.record(
            AuditEntry(
                actor_id=actor_id,
                action=action,
                target=target,
                recorded_at=self._time.utcnow(),
            )
        )
        self._log_operation("record", actor_id=actor_id, action=action).debug(
            "audit_entry_recorded", target=target
        )
        return entry

    def list_entries(
        self,
        viewer: User,
        actor_id: int | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> Page[AuditEntry]:
        """List entries newest first.

        Raises:
            AuthorizationError: If viewer lacks VIEW_AUDIT_LOG.
        """
        require_capability(viewer, Capability.VIEW_AUDIT_LOG)
        items, total = self._audit_log.list_entries(
            actor_id=actor_id, offset=offset, limit=limit
        )
        return Page(items=items, total=total, offset=offset, limit=limit)
