"""Authentication request/response models."""

from pydantic import BaseModel, Field

from festival.api.models.common import DateTimeWithZ


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=256)


class LoginResponse(BaseModel):
    """Issued session token.

    Attributes:
        access_token: Bearer token for the Authorization header.
        token_type: Always "bearer".
        user_id: Owner of the token.
        expires_at: Token expiry (UTC).
    """

    access_token: str
    token_type: str = "bearer"
    user_id: int
    expires_at: DateTimeWithZ


class RegisterRequest(BaseModel):
    username: str = Field(..., description="5-20 chars, starts with a letter")
    password: str
    full_name: str = Field(..., min_length=1, max_length=200)
