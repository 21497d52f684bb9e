"""API route handlers."""

from guestgate.infrastructure.api.routes.access_codes_router import router as access_codes_router
from guestgate.infrastructure.api.routes.auth_router import router as auth_router
from guestgate.infrastructure.api.routes.event_staff_router import router as event_staff_router
from guestgate.infrastructure.api.routes.events_router import router as events_router
from guestgate.infrastructure.api.routes.guests_router import router as guests_router
from guestgate.infrastructure.api.routes.public_router import router as public_router
from guestgate.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "access_codes_router",
    "auth_router",
    "event_staff_router",
    "events_router",
    "guests_router",
    "public_router",
    "users_router",
]
