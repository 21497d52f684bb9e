"""Event staff roster API routes, nested under an event."""

from fastapi import APIRouter, Depends, Query, status

from guestgate.domain.services import EventStaffService
from guestgate.infrastructure.api.dependencies import get_event_staff_service
from guestgate.infrastructure.api.schemas import (
    EventStaffCreateRequest,
    EventStaffResponse,
    EventStaffUpdateRequest,
)

router = APIRouter()

REQUIRED_FIELDS = {"name", "checked_in"}


@router.get("/{event_id}/staff", response_model=list[EventStaffResponse])
async def list_staff(
    event_id: str,
    search: str | None = Query(None, max_length=255, description="Match on name or function"),
    service: EventStaffService = Depends(get_event_staff_service),
) -> list[EventStaffResponse]:
    members = await service.list_staff(event_id, search)
    return [EventStaffResponse.model_validate(member) for member in members]


@router.post(
    "/{event_id}/staff",
    status_code=status.HTTP_201_CREATED,
    response_model=EventStaffResponse,
    responses={403: {"description": "Admins and staff only"}},
)
async def add_member(
    event_id: str,
    request: EventStaffCreateRequest,
    service: EventStaffService = Depends(get_event_staff_service),
) -> EventStaffResponse:
    member = await service.add_member(event_id, request.model_dump(exclude_none=True))
    return EventStaffResponse.model_validate(member)


@router.patch(
    "/{event_id}/staff/{member_id}",
    response_model=EventStaffResponse,
    responses={403: {"description": "Reception may only change check-in fields"}},
)
async def update_member(
    event_id: str,
    member_id: str,
    request: EventStaffUpdateRequest,
    service: EventStaffService = Depends(get_event_staff_service),
) -> EventStaffResponse:
    values = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key not in REQUIRED_FIELDS
    }
    member = await service.update_member(event_id, member_id, values)
    return EventStaffResponse.model_validate(member)


@router.post("/{event_id}/staff/{member_id}/check-in", response_model=EventStaffResponse)
async def toggle_check_in(
    event_id: str,
    member_id: str,
    service: EventStaffService = Depends(get_event_staff_service),
) -> EventStaffResponse:
    """Check a crew member in, or out if already checked in."""
    return EventStaffResponse.model_validate(await service.toggle_check_in(event_id, member_id))


@router.delete(
    "/{event_id}/staff/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"description": "Admins only"}},
)
async def delete_member(
    event_id: str,
    member_id: str,
    service: EventStaffService = Depends(get_event_staff_service),
) -> None:
    await service.delete_member(event_id, member_id)
