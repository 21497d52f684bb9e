"""API Schemas for request/response validation."""

from guestgate.infrastructure.api.schemas.access_code_schemas import (
    AccessCodeResponse,
    AccessCodeUpdateRequest,
)
from guestgate.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    MeResponse,
    SignupRequest,
)
from guestgate.infrastructure.api.schemas.event_schemas import (
    EventCreateRequest,
    EventResponse,
    EventUpdateRequest,
    PublicEventResponse,
)
from guestgate.infrastructure.api.schemas.event_staff_schemas import (
    EventStaffCreateRequest,
    EventStaffResponse,
    EventStaffUpdateRequest,
)
from guestgate.infrastructure.api.schemas.guest_schemas import (
    ActivityLogResponse,
    GuestCreateRequest,
    GuestImportRequest,
    GuestImportResponse,
    GuestResponse,
    GuestUpdateRequest,
    SelfCheckInRequest,
)
from guestgate.infrastructure.api.schemas.user_schemas import (
    PasswordResetRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    UserSummaryResponse,
)

__all__ = [
    "AccessCodeResponse",
    "AccessCodeUpdateRequest",
    "ActivityLogResponse",
    "AuthResponse",
    "ErrorResponse",
    "EventCreateRequest",
    "EventResponse",
    "EventStaffCreateRequest",
    "EventStaffResponse",
    "EventStaffUpdateRequest",
    "EventUpdateRequest",
    "GuestCreateRequest",
    "GuestImportRequest",
    "GuestImportResponse",
    "GuestResponse",
    "GuestUpdateRequest",
    "LoginRequest",
    "MeResponse",
    "PasswordResetRequest",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "PublicEventResponse",
    "SelfCheckInRequest",
    "SignupRequest",
    "UserSummaryResponse",
]
