"""Guest and activity log API routes, nested under an event."""

from fastapi import APIRouter, Depends, Query, status

from guestgate.domain.services import ActivityLogService, GuestService
from guestgate.infrastructure.api.dependencies import (
    get_activity_log_service,
    get_guest_service,
)
from guestgate.infrastructure.api.schemas import (
    ActivityLogResponse,
    GuestCreateRequest,
    GuestImportRequest,
    GuestImportResponse,
    GuestResponse,
    GuestUpdateRequest,
)
from guestgate.infrastructure.persistence.repositories.activity_log_repository import (
    DEFAULT_LOG_LIMIT,
)

router = APIRouter()

REQUIRED_FIELDS = {"name", "checked_in"}


@router.get("/{event_id}/guests", response_model=list[GuestResponse])
async def list_guests(
    event_id: str,
    search: str | None = Query(None, max_length=255, description="Match on name or company"),
    service: GuestService = Depends(get_guest_service),
) -> list[GuestResponse]:
    guests = await service.list_guests(event_id, search)
    return [GuestResponse.model_validate(guest) for guest in guests]


@router.post(
    "/{event_id}/guests",
    status_code=status.HTTP_201_CREATED,
    response_model=GuestResponse,
    responses={403: {"description": "Admins and staff only"}},
)
async def add_guest(
    event_id: str,
    request: GuestCreateRequest,
    service: GuestService = Depends(get_guest_service),
) -> GuestResponse:
    guest = await service.add_guest(event_id, request.model_dump(exclude_none=True))
    return GuestResponse.model_validate(guest)


@router.post(
    "/{event_id}/guests/import",
    status_code=status.HTTP_201_CREATED,
    response_model=GuestImportResponse,
    responses={400: {"description": "No valid guests found"}},
)
async def import_guests(
    event_id: str,
    request: GuestImportRequest,
    service: GuestService = Depends(get_guest_service),
) -> GuestImportResponse:
    """Add guests from spreadsheet rows keyed by column header."""
    guests = await service.import_guests(event_id, request.rows)
    return GuestImportResponse(
        imported=len(guests),
        skipped=len(request.rows) - len(guests),
        guests=[GuestResponse.model_validate(guest) for guest in guests],
    )


@router.patch(
    "/{event_id}/guests/{guest_id}",
    response_model=GuestResponse,
    responses={403: {"description": "Reception may only change check-in fields"}},
)
async def update_guest(
    event_id: str,
    guest_id: str,
    request: GuestUpdateRequest,
    service: GuestService = Depends(get_guest_service),
) -> GuestResponse:
    values = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key not in REQUIRED_FIELDS
    }
    guest = await service.update_guest(event_id, guest_id, values)
    return GuestResponse.model_validate(guest)


@router.post("/{event_id}/guests/{guest_id}/check-in", response_model=GuestResponse)
async def toggle_check_in(
    event_id: str,
    guest_id: str,
    service: GuestService = Depends(get_guest_service),
) -> GuestResponse:
    """Check a guest in, or out if already checked in."""
    return GuestResponse.model_validate(await service.toggle_check_in(event_id, guest_id))


@router.delete(
    "/{event_id}/guests/{guest_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"description": "Admins only"}},
)
async def delete_guest(
    event_id: str,
    guest_id: str,
    service: GuestService = Depends(get_guest_service),
) -> None:
    await service.delete_guest(event_id, guest_id)


@router.get("/{event_id}/activity-logs", response_model=list[ActivityLogResponse])
async def list_activity_logs(
    event_id: str,
    limit: int = Query(DEFAULT_LOG_LIMIT, ge=1, le=DEFAULT_LOG_LIMIT),
    service: ActivityLogService = Depends(get_activity_log_service),
) -> list[ActivityLogResponse]:
    """Latest activity of an event, newest first."""
    entries = await service.list_recent(event_id, limit)
    return [ActivityLogResponse.model_validate(entry) for entry in entries]
