"""User account request/response models."""

from pydantic import BaseModel, Field

from festival.api.models.common import DateTimeWithZ


class UserResponse(BaseModel):
    id: int
    username: str
    full_name: str
    role: str
    active: bool
    last_login_at: DateTimeWithZ | None = None


class UpdateProfileRequest(BaseModel):
    """Profile changes; omitted fields are left unchanged."""

    username: str | None = None
    full_name: str | None = Field(default=None, max_length=200)


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str
    repeat_password: str
