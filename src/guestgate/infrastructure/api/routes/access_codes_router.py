"""Access code API routes (admin only)."""

from fastapi import APIRouter, Depends

from guestgate.domain.services import AccessCodeService
from guestgate.infrastructure.api.dependencies import get_access_code_service
from guestgate.infrastructure.api.schemas import (
    AccessCodeResponse,
    AccessCodeUpdateRequest,
)

router = APIRouter()


@router.get(
    "",
    response_model=list[AccessCodeResponse],
    responses={403: {"description": "Admins only"}},
)
async def list_access_codes(
    service: AccessCodeService = Depends(get_access_code_service),
) -> list[AccessCodeResponse]:
    codes = await service.list_access_codes()
    return [AccessCodeResponse.model_validate(code) for code in codes]


@router.put(
    "/{role}",
    response_model=AccessCodeResponse,
    responses={
        400: {"description": "Empty code or code used by another role"},
        403: {"description": "Admins only"},
        404: {"description": "Unknown role"},
    },
)
async def update_access_code(
    role: str,
    request: AccessCodeUpdateRequest,
    service: AccessCodeService = Depends(get_access_code_service),
) -> AccessCodeResponse:
    """Replace the code of a role. The previous code stops working at once."""
    updated = await service.update_access_code(role, request.code)
    return AccessCodeResponse.model_validate(updated)
