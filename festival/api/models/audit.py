"""Audit log response models."""

from pydantic import BaseModel

from festival.api.models.common import DateTimeWithZ, PageMeta


class AuditEntryResponse(BaseModel):
    id: int
    actor_id: int | None
    action: str
    target: str | None
    recorded_at: DateTimeWithZ


class AuditEntryListResponse(BaseModel):
    items: list[AuditEntryResponse]
    page: PageMeta
