"""Authentication routes: login, logout, self-registration."""

from fastapi import APIRouter, Depends, Response

from festival.api.dependencies.festival import (
    get_authentication_service,
    get_bearer_token,
    get_current_user,
    get_user_account_service,
)
from festival.api.models.auth import LoginRequest, LoginResponse, RegisterRequest
from festival.api.models.users import UserResponse
from festival.api.routes.users import to_user_response
from festival.application.services.authentication_service import (
    AuthenticationService,
)
from festival.application.services.user_account_service import UserAccountService
from festival.domain.models.user import User

router = APIRouter(prefix="/v1/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    request_data: LoginRequest,
    service: AuthenticationService = Depends(get_authentication_service),
) -> LoginResponse:
    """Exchange credentials for a bearer token."""
    issued = service.authenticate(request_data.username, request_data.password)
    return LoginResponse(
        access_token=issued.token,
        user_id=issued.user_id,
        expires_at=issued.expires_at,
    )


@router.post("/logout", status_code=204)
def logout(
    token: str = Depends(get_bearer_token),
    user: User = Depends(get_current_user),
    service: AuthenticationService = Depends(get_authentication_service),
) -> Response:
    service.logout(user.id, token)
    return Response(status_code=204)


@router.post("/register", response_model=UserResponse, status_code=201)
def register(
    request_data: RegisterRequest,
    service: UserAccountService = Depends(get_user_account_service),
) -> UserResponse:
    """Self-register; the account stays inactive until an admin activates it."""
    user = service.register(
        username=request_data.username,
        password=request_data.password,
        full_name=request_data.full_name,
    )
    return to_user_response(user)
