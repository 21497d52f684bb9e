"""Core GuestGate utilities: configuration, logging, hooks and policies."""

from guestgate.core.config import Settings, get_settings
from guestgate.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "bind_correlation_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_settings",
]
