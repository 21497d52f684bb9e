"""SQLAlchemy models for the GuestGate tables.

All models inherit from the Base class defined in database.py and are
created on application startup in development mode.
"""

from guestgate.infrastructure.persistence.models.access_code import AccessCodeModel
from guestgate.infrastructure.persistence.models.activity_log import ActivityLogModel
from guestgate.infrastructure.persistence.models.event import EventModel
from guestgate.infrastructure.persistence.models.event_staff import EventStaffModel
from guestgate.infrastructure.persistence.models.guest import GuestModel
from guestgate.infrastructure.persistence.models.identity import IdentityModel
from guestgate.infrastructure.persistence.models.profile import ProfileModel
from guestgate.infrastructure.persistence.models.user_role import UserRoleModel

__all__ = [
    "AccessCodeModel",
    "ActivityLogModel",
    "EventModel",
    "EventStaffModel",
    "GuestModel",
    "IdentityModel",
    "ProfileModel",
    "UserRoleModel",
]
