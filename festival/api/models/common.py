"""Shared API models."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# ISO 8601 with Z suffix
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class PageMeta(BaseModel):
    """Paging metadata returned with every list response."""

    total: int = Field(..., ge=0, description="Matches before paging")
    offset: int = Field(..., ge=0)
    limit: int = Field(..., ge=0)
    has_more: bool


class ErrorResponse(BaseModel):
    """RFC 7807 error body.

    Error-specific members (field, violations, mismatched, actual, ...) are
    kept as extension members.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
