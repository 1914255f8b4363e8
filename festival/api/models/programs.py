"""Program request/response models."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field

from festival.api.models.common import DateTimeWithZ, PageMeta


class ProgramStateEnum(str, Enum):
    """Program lifecycle phase."""

    CREATED = "CREATED"
    SUBMISSION = "SUBMISSION"
    ASSIGNMENT = "ASSIGNMENT"
    REVIEW = "REVIEW"
    SCHEDULING = "SCHEDULING"
    FINAL_PUBLICATION = "FINAL_PUBLICATION"
    DECISION = "DECISION"
    ANNOUNCED = "ANNOUNCED"


class ProgramRequest(BaseModel):
    """Create or replace a program's descriptive fields."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    start_date: date
    end_date: date


class ChangeStateRequest(BaseModel):
    state: ProgramStateEnum


class MemberRequest(BaseModel):
    user_id: int


class ProgramResponse(BaseModel):
    """A program as visible to the caller.

    Membership and creation details are only populated when the caller
    has full access to the program.
    """

    id: int
    name: str
    description: str
    start_date: date
    end_date: date
    state: ProgramStateEnum
    creator_id: int | None = None
    programmers: list[int] | None = None
    staff: list[int] | None = None
    created_at: DateTimeWithZ | None = None


class ProgramListResponse(BaseModel):
    items: list[ProgramResponse]
    page: PageMeta
