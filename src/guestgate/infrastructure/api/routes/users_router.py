"""User management API routes."""

from fastapi import APIRouter, Depends, status

from guestgate.domain.services import UserAdminService
from guestgate.infrastructure.api.dependencies import get_user_admin_service
from guestgate.infrastructure.api.schemas import (
    PasswordResetRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    UserSummaryResponse,
)

router = APIRouter()


@router.get("", response_model=list[UserSummaryResponse])
async def list_users(
    service: UserAdminService = Depends(get_user_admin_service),
) -> list[UserSummaryResponse]:
    """List users with their roles. Non-admins only see themselves."""
    users = await service.list_users()
    return [
        UserSummaryResponse(
            user_id=user.user_id,
            email=user.email,
            display_name=user.display_name,
            role=user.role.value if user.role is not None else None,
            created_at=user.created_at,
        )
        for user in users
    ]


@router.patch(
    "/{user_id}/profile",
    response_model=ProfileResponse,
    responses={403: {"description": "Not your profile"}, 404: {"description": "User not found"}},
)
async def update_profile(
    user_id: str,
    request: ProfileUpdateRequest,
    service: UserAdminService = Depends(get_user_admin_service),
) -> ProfileResponse:
    profile = await service.update_display_name(user_id, request.display_name)
    return ProfileResponse.model_validate(profile)


@router.post(
    "/{user_id}/password",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "Password too weak"},
        403: {"description": "Admins only"},
        404: {"description": "User not found"},
    },
)
async def reset_password(
    user_id: str,
    request: PasswordResetRequest,
    service: UserAdminService = Depends(get_user_admin_service),
) -> None:
    """Set a new password for another user."""
    await service.reset_password(user_id, request.password)


@router.delete(
    "/{user_id}/role",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"description": "Admins only"}, 404: {"description": "User holds no role"}},
)
async def revoke_role(
    user_id: str,
    service: UserAdminService = Depends(get_user_admin_service),
) -> None:
    await service.revoke_role(user_id)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "Cannot remove yourself"},
        403: {"description": "Admins only"},
        404: {"description": "User not found"},
    },
)
async def remove_user(
    user_id: str,
    service: UserAdminService = Depends(get_user_admin_service),
) -> None:
    """Remove a user: role and profile are deleted, login is disabled."""
    await service.remove_user(user_id)
