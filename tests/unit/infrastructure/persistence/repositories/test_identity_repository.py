"""Tests for IdentityRepository against an in-memory database."""

import pytest

from guestgate.infrastructure.persistence.repositories import IdentityRepository


@pytest.mark.asyncio
async def test_deactivate_keeps_the_row(db_session, create_user):
    user = await create_user()
    repo = IdentityRepository(db_session)

    assert await repo.deactivate(user.id) is True
    await db_session.commit()

    identity = await repo.get_by_id(user.id)
    await db_session.refresh(identity)
    assert identity.is_active is False
    assert identity.email == user.email
    assert await repo.deactivate("missing") is False


@pytest.mark.asyncio
async def test_role_revocation_stamp_is_set_once(db_session, create_user):
    user = await create_user()
    repo = IdentityRepository(db_session)

    await repo.mark_role_revoked(user.id)
    await db_session.commit()
    identity = await repo.get_by_id(user.id)
    await db_session.refresh(identity)
    first = identity.role_revoked_at

    await repo.mark_role_revoked(user.id)
    await db_session.commit()
    await db_session.refresh(identity)

    assert first is not None
    assert identity.role_revoked_at == first


@pytest.mark.asyncio
async def test_update_password(db_session, create_user):
    user = await create_user()
    repo = IdentityRepository(db_session)

    assert await repo.update_password(user.id, "new-hash") is True
    assert await repo.update_password("missing", "new-hash") is False
    await db_session.commit()

    identity = await repo.get_by_id(user.id)
    await db_session.refresh(identity)
    assert identity.password_hash == "new-hash"
