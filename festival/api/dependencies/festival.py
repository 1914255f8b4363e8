"""Festival API dependencies.

Service providers come from the bootstrap composition root. The identity
dependencies read the bearer token and the optional X-Acting-User-Id
header; the latter is the claimed identity checked against the token
owner on every authenticated request.
"""

from __future__ import annotations

from fastapi import Depends, Header

from festival.application.services.authentication_service import (
    AuthenticationService,
)
from festival.bootstrap.festival import (
    get_audit_trail_service,
    get_authentication_service,
    get_festival_config,
    get_program_service,
    get_screening_query_service,
    get_screening_service,
    get_user_account_service,
)
from festival.domain.errors import InvalidTokenError
from festival.domain.models.user import User

BEARER_PREFIX = "bearer "


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    """Extract the bearer token or fail with 401."""
    token = _bearer_token(authorization)
    if token is None:
        raise InvalidTokenError("Missing bearer token")
    return token


def get_current_user(
    token: str = Depends(get_bearer_token),
    x_acting_user_id: int | None = Header(default=None),
    service: AuthenticationService = Depends(get_authentication_service),
) -> User:
    """Resolve the authenticated actor for this request."""
    return service.authenticate_request(token, claimed_user_id=x_acting_user_id)


def get_optional_user(
    authorization: str | None = Header(default=None),
    x_acting_user_id: int | None = Header(default=None),
    service: AuthenticationService = Depends(get_authentication_service),
) -> User | None:
    """Resolve the actor when a token is present; visitors get None."""
    token = _bearer_token(authorization)
    if token is None:
        return None
    return service.authenticate_request(token, claimed_user_id=x_acting_user_id)


__all__ = [
    "get_audit_trail_service",
    "get_authentication_service",
    "get_bearer_token",
    "get_current_user",
    "get_festival_config",
    "get_optional_user",
    "get_program_service",
    "get_screening_query_service",
    "get_screening_service",
    "get_user_account_service",
]
