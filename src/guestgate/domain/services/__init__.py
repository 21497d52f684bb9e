"""Domain services for GuestGate.

The role resolver and role assignment service form the trusted core; every
other service reaches data through a ``PolicyGate``.
"""

from guestgate.domain.services.access_code_service import AccessCodeService
from guestgate.domain.services.activity_log_service import (
    ActivityAction,
    ActivityLogService,
)
from guestgate.domain.services.event_service import EventService
from guestgate.domain.services.event_staff_service import EventStaffService
from guestgate.domain.services.guest_import import extract_guests
from guestgate.domain.services.guest_service import GuestService
from guestgate.domain.services.password_validator import (
    PasswordValidationError,
    PasswordValidator,
)
from guestgate.domain.services.policy_gate import PolicyGate
from guestgate.domain.services.role_assignment_service import RoleAssignmentService
from guestgate.domain.services.role_resolver import RoleResolver
from guestgate.domain.services.signup_service import SignupResult, SignupService
from guestgate.domain.services.user_admin_service import UserAdminService, UserSummary

__all__ = [
    "AccessCodeService",
    "ActivityAction",
    "ActivityLogService",
    "EventService",
    "EventStaffService",
    "GuestService",
    "PasswordValidationError",
    "PasswordValidator",
    "PolicyGate",
    "RoleAssignmentService",
    "RoleResolver",
    "SignupResult",
    "SignupService",
    "UserAdminService",
    "UserSummary",
    "extract_guests",
]
