"""Hook system core module.

Example usage:
    from guestgate.core.hooks import HookEvent, HookRegistry

    registry = HookRegistry()

    async def announce(event, data, context):
        logger.info("Guest changed", **data)

    registry.register(HookEvent.ON_GUEST_AFTER_CHANGE, announce)
"""

from guestgate.core.hooks.hook_events import (
    EVENT_CATEGORIES,
    HookCategory,
    HookEvent,
    get_all_events,
)
from guestgate.core.hooks.hook_registry import HookRegistry, RegisteredHook

__all__ = [
    "EVENT_CATEGORIES",
    "HookCategory",
    "HookEvent",
    "HookRegistry",
    "RegisteredHook",
    "get_all_events",
]
