"""Public API routes for the Wi-Fi display, totem and self check-in screens.

No token is needed. Requests run on the public channel, so the policy layer
only allows reading events and checking in as a new guest.
"""

from fastapi import APIRouter, Depends, status

from guestgate.domain.services import EventService, GuestService
from guestgate.infrastructure.api.dependencies import (
    get_public_event_service,
    get_public_guest_service,
)
from guestgate.infrastructure.api.schemas import (
    GuestResponse,
    PublicEventResponse,
    SelfCheckInRequest,
)

router = APIRouter()


@router.get("/events/{event_id}", response_model=PublicEventResponse)
async def get_public_event(
    event_id: str,
    service: EventService = Depends(get_public_event_service),
) -> PublicEventResponse:
    return PublicEventResponse.model_validate(await service.get_event(event_id))


@router.post(
    "/events/{event_id}/self-check-in",
    status_code=status.HTTP_201_CREATED,
    response_model=GuestResponse,
    responses={404: {"description": "Event not found"}},
)
async def self_check_in(
    event_id: str,
    request: SelfCheckInRequest,
    service: GuestService = Depends(get_public_guest_service),
) -> GuestResponse:
    guest = await service.self_check_in(event_id, request.model_dump(exclude_none=True))
    return GuestResponse.model_validate(guest)
