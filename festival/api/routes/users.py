"""User account routes."""

from fastapi import APIRouter, Depends, Response

from festival.api.dependencies.festival import (
    get_current_user,
    get_user_account_service,
)
from festival.api.models.users import (
    ChangePasswordRequest,
    UpdateProfileRequest,
    UserResponse,
)
from festival.application.services.user_account_service import UserAccountService
from festival.domain.errors import AuthorizationError
from festival.domain.models.user import User

router = APIRouter(prefix="/v1/users", tags=["users"])


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        full_name=user.full_name,
        role=user.role.value,
        active=user.active,
        last_login_at=user.last_login_at,
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    actor: User = Depends(get_current_user),
    service: UserAccountService = Depends(get_user_account_service),
) -> UserResponse:
    return to_user_response(service.get_user(actor.id, user_id))


@router.patch("/{user_id}", response_model=UserResponse)
def update_profile(
    user_id: int,
    request_data: UpdateProfileRequest,
    actor: User = Depends(get_current_user),
    service: UserAccountService = Depends(get_user_account_service),
) -> UserResponse:
    user = service.update_profile(
        actor.id,
        user_id,
        username=request_data.username,
        full_name=request_data.full_name,
    )
    return to_user_response(user)


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: int,
    actor: User = Depends(get_current_user),
    service: UserAccountService = Depends(get_user_account_service),
) -> Response:
    service.delete_user(actor.id, user_id)
    return Response(status_code=204)


@router.post("/{user_id}/password", response_model=UserResponse)
def change_password(
    user_id: int,
    request_data: ChangePasswordRequest,
    actor: User = Depends(get_current_user),
    service: UserAccountService = Depends(get_user_account_service),
) -> UserResponse:
    """Change the caller's own password; the current session ends."""
    if user_id != actor.id:
        raise AuthorizationError(
            "Users may only change their own password",
            actor_id=actor.id,
            action="change_password",
        )
    user = service.change_password(
        user_id,
        current_password=request_data.current_password,
        new_password=request_data.new_password,
        repeat_password=request_data.repeat_password,
    )
    return to_user_response(user)


@router.post("/{user_id}/activate", response_model=UserResponse)
def activate(
    user_id: int,
    actor: User = Depends(get_current_user),
    service: UserAccountService = Depends(get_user_account_service),
) -> UserResponse:
    return to_user_response(service.activate(actor.id, user_id))


@router.post("/{user_id}/deactivate", response_model=UserResponse)
def deactivate(
    user_id: int,
    actor: User = Depends(get_current_user),
    service: UserAccountService = Depends(get_user_account_service),
) -> UserResponse:
    return to_user_response(service.deactivate(actor.id, user_id))
