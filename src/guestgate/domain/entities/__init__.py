"""Domain entities for GuestGate.

Entities are plain Python types that represent core concepts. They have no
dependency on the web framework.
"""

from guestgate.domain.entities.app_role import ROLE_ALIASES, AppRole
from guestgate.domain.entities.caller import (
    AUTHENTICATED_CHANNEL,
    PUBLIC_CHANNEL,
    Caller,
)
from guestgate.domain.entities.hook_context import (
    AbortHookException,
    HookContext,
    HookResult,
)

__all__ = [
    "AUTHENTICATED_CHANNEL",
    "AbortHookException",
    "AppRole",
    "Caller",
    "HookContext",
    "HookResult",
    "PUBLIC_CHANNEL",
    "ROLE_ALIASES",
]
