"""Hook event names.

Events follow the pattern ``on_<area>_<timing>_<operation>``. After-events
fire once the triggering change has been flushed, so hooks may read it in
the same session.
"""


class HookCategory:
    """Groups used when listing events."""

    APP_LIFECYCLE = "app_lifecycle"
    AUTH_OPERATIONS = "auth_operations"
    ROLE_OPERATIONS = "role_operations"
    GUEST_OPERATIONS = "guest_operations"


class HookEvent:
    """All hook events GuestGate triggers."""

    # App lifecycle
    ON_BOOTSTRAP = "on_bootstrap"
    ON_SERVE = "on_serve"
    ON_TERMINATE = "on_terminate"

    # Identity provider
    ON_AUTH_AFTER_REGISTER = "on_auth_after_register"

    # Roles and access codes
    ON_ROLE_AFTER_ASSIGN = "on_role_after_assign"
    ON_ROLE_AFTER_REVOKE = "on_role_after_revoke"
    ON_ACCESS_CODE_AFTER_UPDATE = "on_access_code_after_update"

    # Best-effort change feed for live guest lists
    ON_GUEST_AFTER_CHANGE = "on_guest_after_change"


EVENT_CATEGORIES: dict[str, str] = {
    HookEvent.ON_BOOTSTRAP: HookCategory.APP_LIFECYCLE,
    HookEvent.ON_SERVE: HookCategory.APP_LIFECYCLE,
    HookEvent.ON_TERMINATE: HookCategory.APP_LIFECYCLE,
    HookEvent.ON_AUTH_AFTER_REGISTER: HookCategory.AUTH_OPERATIONS,
    HookEvent.ON_ROLE_AFTER_ASSIGN: HookCategory.ROLE_OPERATIONS,
    HookEvent.ON_ROLE_AFTER_REVOKE: HookCategory.ROLE_OPERATIONS,
    HookEvent.ON_ACCESS_CODE_AFTER_UPDATE: HookCategory.ROLE_OPERATIONS,
    HookEvent.ON_GUEST_AFTER_CHANGE: HookCategory.GUEST_OPERATIONS,
}


def get_all_events() -> list[str]:
    """Get all available hook event names."""
    return list(EVENT_CATEGORIES)
