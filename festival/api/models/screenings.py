"""Screening request/response models."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field

from festival.api.models.common import DateTimeWithZ, PageMeta


class ScreeningStateEnum(str, Enum):
    """Screening lifecycle state."""

    CREATED = "CREATED"
    SUBMITTED = "SUBMITTED"
    REVIEWED = "REVIEWED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    FINAL_SUBMITTED = "FINAL_SUBMITTED"
    SCHEDULED = "SCHEDULED"


class ScreeningSortEnum(str, Enum):
    TIMETABLE = "TIMETABLE"
    GENRE = "GENRE"


class ScreeningDraftRequest(BaseModel):
    """Draft fields; all optional until submission."""

    title: str | None = Field(default=None, max_length=300)
    genre: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=5000)


class AssignHandlerRequest(BaseModel):
    handler_id: int | None = None


class ReviewRequest(BaseModel):
    score: int
    comments: str | None = Field(default=None, max_length=5000)


class RejectRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=2000)


class ScheduleRequest(BaseModel):
    scheduled_on: date | None = None
    room: str | None = Field(default=None, max_length=100)


class ScreeningResponse(BaseModel):
    id: int
    program_id: int
    submitter_id: int
    title: str | None
    genre: str | None
    description: str | None
    state: ScreeningStateEnum
    handler_id: int | None = None
    review_score: int | None = None
    review_comments: str | None = None
    rejection_reason: str | None = None
    room: str | None = None
    scheduled_on: date | None = None
    created_at: DateTimeWithZ
    submitted_at: DateTimeWithZ | None = None
    reviewed_at: DateTimeWithZ | None = None
    final_submitted_at: DateTimeWithZ | None = None


class ScreeningListResponse(BaseModel):
    items: list[ScreeningResponse]
    page: PageMeta
