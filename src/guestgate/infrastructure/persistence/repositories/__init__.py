"""Persistence repositories for database operations."""

from guestgate.infrastructure.persistence.repositories.access_code_repository import (
    AccessCodeRepository,
)
from guestgate.infrastructure.persistence.repositories.activity_log_repository import (
    ActivityLogRepository,
)
from guestgate.infrastructure.persistence.repositories.event_repository import (
    EventRepository,
)
from guestgate.infrastructure.persistence.repositories.event_staff_repository import (
    EventStaffRepository,
)
from guestgate.infrastructure.persistence.repositories.guest_repository import (
    GuestRepository,
)
from guestgate.infrastructure.persistence.repositories.identity_repository import (
    IdentityRepository,
)
from guestgate.infrastructure.persistence.repositories.profile_repository import (
    ProfileRepository,
)
from guestgate.infrastructure.persistence.repositories.user_role_repository import (
    UserRoleRepository,
)

__all__ = [
    "AccessCodeRepository",
    "ActivityLogRepository",
    "EventRepository",
    "EventStaffRepository",
    "GuestRepository",
    "IdentityRepository",
    "ProfileRepository",
    "UserRoleRepository",
]
