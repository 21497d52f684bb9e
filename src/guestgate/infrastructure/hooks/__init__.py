"""Built-in hooks and their registration."""

from guestgate.infrastructure.hooks.builtin_hooks import (
    create_profile_hook,
    guest_change_feed_hook,
    register_builtin_hooks,
)

__all__ = [
    "create_profile_hook",
    "guest_change_feed_hook",
    "register_builtin_hooks",
]
