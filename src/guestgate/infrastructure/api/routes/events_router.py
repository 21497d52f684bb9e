"""Event API routes."""

from fastapi import APIRouter, Depends, status

from guestgate.domain.services import EventService
from guestgate.infrastructure.api.dependencies import get_event_service
from guestgate.infrastructure.api.schemas import (
    EventCreateRequest,
    EventResponse,
    EventUpdateRequest,
)

router = APIRouter()

# Columns that cannot be cleared, so an explicit null leaves them unchanged
REQUIRED_FIELDS = {"name", "primary_color", "event_logo_size"}


@router.get("", response_model=list[EventResponse])
async def list_events(service: EventService = Depends(get_event_service)) -> list[EventResponse]:
    events = await service.list_events()
    return [EventResponse.model_validate(event) for event in events]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=EventResponse,
    responses={403: {"description": "Admins and staff only"}},
)
async def create_event(
    request: EventCreateRequest,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    event = await service.create_event(request.model_dump(exclude_none=True))
    return EventResponse.model_validate(event)


@router.get("/{event_id}", response_model=EventResponse, responses={404: {"description": "Event not found"}})
async def get_event(event_id: str, service: EventService = Depends(get_event_service)) -> EventResponse:
    return EventResponse.model_validate(await service.get_event(event_id))


@router.patch(
    "/{event_id}",
    response_model=EventResponse,
    responses={403: {"description": "Admins and staff only"}, 404: {"description": "Event not found"}},
)
async def update_event(
    event_id: str,
    request: EventUpdateRequest,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    values = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key not in REQUIRED_FIELDS
    }
    event = await service.update_event(event_id, values)
    return EventResponse.model_validate(event)


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"description": "Admins, or the staff member who created it"}},
)
async def delete_event(event_id: str, service: EventService = Depends(get_event_service)) -> None:
    await service.delete_event(event_id)
