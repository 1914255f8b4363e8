"""Audit log routes (admin only)."""

from fastapi import APIRouter, Depends, Query

from festival.api.dependencies.festival import (
    get_audit_trail_service,
    get_current_user,
)
from festival.api.models.audit import AuditEntryListResponse, AuditEntryResponse
from festival.api.models.common import PageMeta
from festival.application.services.audit_trail_service import AuditTrailService
from festival.domain.models.user import User

router = APIRouter(prefix="/v1/audit", tags=["audit"])


@router.get("", response_model=AuditEntryListResponse)
def list_audit_entries(
    actor_id: int | None = None,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    viewer: User = Depends(get_current_user),
    service: AuditTrailService = Depends(get_audit_trail_service),
) -> AuditEntryListResponse:
    """List audit entries, newest first, optionally for one actor."""
    page = service.list_entries(viewer, actor_id=actor_id, offset=offset, limit=limit)
    return AuditEntryListResponse(
        items=[
            AuditEntryResponse(
                id=entry.id,
                actor_id=entry.actor_id,
                action=entry.action,
                target=entry.target,
                recorded_at=entry.recorded_at,
            )
            for entry in page.items
        ],
        page=PageMeta(
            total=page.total,
            offset=page.offset,
            limit=page.limit,
            has_more=page.has_more,
        ),
    )
