"""Built-in hooks for GuestGate.

These hooks provide core system behaviour and cannot be unregistered:
- create_profile_hook: creates the profile of a freshly registered identity
- guest_change_feed_hook: publishes guest changes to the structured log
"""

from typing import Any, Optional

from guestgate.core.hooks.hook_events import HookEvent
from guestgate.core.hooks.hook_registry import HookRegistry
from guestgate.core.logging import get_logger
from guestgate.domain.entities.hook_context import HookContext
from guestgate.infrastructure.persistence.repositories import ProfileRepository

logger = get_logger(__name__)


async def create_profile_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Create the profile row of a new identity in the registering session.

    The display name falls back to the part of the email before the '@'.

    Raises:
        ValueError: If the hook is triggered without a user or a session.
    """
    if data is None or context is None or context.session is None:
        raise ValueError("Profile creation needs identity data and a session")

    email = data.get("email")
    display_name = data.get("display_name") or (email.split("@")[0] if email else None)

    await ProfileRepository(context.session).create(
        user_id=data["user_id"],
        email=email,
        display_name=display_name,
    )
    logger.debug("Profile created", user_id=data["user_id"])
    return data


async def guest_change_feed_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> None:
    """Announce a guest change. Delivery is best effort."""
    if data is None:
        return
    logger.info(
        "Guest changed",
        event_id=data.get("event_id"),
        guest_id=data.get("guest_id"),
        change=data.get("change"),
    )


def register_builtin_hooks(registry: HookRegistry) -> list[str]:
    """Register all built-in hooks.

    Args:
        registry: The HookRegistry to register hooks with.

    Returns:
        List of registered hook IDs.
    """
    # Runs first so user hooks on the same event can read the profile
    profile_hook_id = registry.register(
        event=HookEvent.ON_AUTH_AFTER_REGISTER,
        callback=create_profile_hook,
        priority=100,
        stop_on_error=True,
        is_builtin=True,
    )
    feed_hook_id = registry.register(
        event=HookEvent.ON_GUEST_AFTER_CHANGE,
        callback=guest_change_feed_hook,
        priority=-100,
        is_builtin=True,
    )
    hook_ids = [profile_hook_id, feed_hook_id]

    logger.info("Built-in hooks registered", count=len(hook_ids))
    return hook_ids

