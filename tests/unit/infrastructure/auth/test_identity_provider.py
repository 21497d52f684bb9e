"""Tests for LocalIdentityProvider against an in-memory database."""

import pytest

from guestgate.core.hooks import HookRegistry
from guestgate.domain.exceptions import InvalidCredentialsError
from guestgate.infrastructure.auth import LocalIdentityProvider
from guestgate.infrastructure.persistence.models import IdentityModel


@pytest.fixture
def provider(db_session):
    return LocalIdentityProvider(db_session, HookRegistry())


@pytest.mark.asyncio
async def test_authenticate(provider, create_user, password):
    user = await create_user()

    session = await provider.authenticate(user.email.upper(), password)

    assert session.user_id == user.id
    assert session.token_type == "Bearer"
    with pytest.raises(InvalidCredentialsError):
        await provider.authenticate(user.email, "WrongPass1")


@pytest.mark.asyncio
async def test_set_password_replaces_the_old_one(provider, db_session, create_user, password):
    user = await create_user()

    assert await provider.set_password(user.id, "Another2026") is True
    await db_session.commit()

    with pytest.raises(InvalidCredentialsError):
        await provider.authenticate(user.email, password)
    assert (await provider.authenticate(user.email, "Another2026")).user_id == user.id
    assert await provider.set_password("missing", "Another2026") is False


@pytest.mark.asyncio
async def test_disabled_identity_cannot_log_in_and_is_kept(provider, db_session, create_user, password):
    user = await create_user()

    assert await provider.disable_identity(user.id) is True
    await db_session.commit()

    with pytest.raises(InvalidCredentialsError):
        await provider.authenticate(user.email, password)
    identity = await db_session.get(IdentityModel, user.id)
    await db_session.refresh(identity)
    assert identity.is_active is False
    assert identity.role_revoked_at is not None
