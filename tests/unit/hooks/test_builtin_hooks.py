"""Unit tests for the built-in hooks."""

import pytest

from guestgate.core.hooks import HookEvent, HookRegistry
from guestgate.domain.entities import HookContext
from guestgate.infrastructure.hooks import (
    create_profile_hook,
    guest_change_feed_hook,
    register_builtin_hooks,
)
from guestgate.infrastructure.persistence.repositories import ProfileRepository


def test_register_builtin_hooks():
    registry = HookRegistry()

    hook_ids = register_builtin_hooks(registry)

    assert len(hook_ids) == 2
    profile_hooks = registry.get_hooks_for_event(HookEvent.ON_AUTH_AFTER_REGISTER)
    assert len(profile_hooks) == 1
    assert profile_hooks[0].is_builtin is True
    assert profile_hooks[0].stop_on_error is True
    assert registry.clear() == 0


@pytest.mark.asyncio
async def test_create_profile_hook_uses_display_name(db_session, create_identity):
    await create_identity("u-1", "ana@example.com")
    await create_profile_hook(
        HookEvent.ON_AUTH_AFTER_REGISTER,
        {"user_id": "u-1", "email": "ana@example.com", "display_name": "Ana Souza"},
        HookContext(user_id="u-1", session=db_session),
    )

    profile = await ProfileRepository(db_session).get_by_user_id("u-1")
    assert profile is not None
    assert profile.display_name == "Ana Souza"
    assert profile.email == "ana@example.com"


@pytest.mark.asyncio
async def test_create_profile_hook_falls_back_to_email_prefix(db_session, create_identity):
    await create_identity("u-2", "bruno@example.com")
    await create_profile_hook(
        HookEvent.ON_AUTH_AFTER_REGISTER,
        {"user_id": "u-2", "email": "bruno@example.com"},
        HookContext(user_id="u-2", session=db_session),
    )

    profile = await ProfileRepository(db_session).get_by_user_id("u-2")
    assert profile.display_name == "bruno"


@pytest.mark.asyncio
async def test_create_profile_hook_needs_a_session():
    with pytest.raises(ValueError):
        await create_profile_hook(
            HookEvent.ON_AUTH_AFTER_REGISTER,
            {"user_id": "u-3", "email": "x@example.com"},
            HookContext(user_id="u-3"),
        )


@pytest.mark.asyncio
async def test_guest_change_feed_hook_ignores_missing_data():
    assert await guest_change_feed_hook(HookEvent.ON_GUEST_AFTER_CHANGE, None, None) is None
    assert (
        await guest_change_feed_hook(
            HookEvent.ON_GUEST_AFTER_CHANGE,
            {"event_id": "e1", "guest_id": "g1", "change": "update"},
            HookContext(),
        )
        is None
    )
