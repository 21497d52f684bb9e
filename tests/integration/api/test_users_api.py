"""Integration tests for user listing, profile edits, password resets, revocation and removal."""

import pytest
from sqlalchemy import select

from guestgate.domain.entities import AppRole
from guestgate.infrastructure.persistence.models import (
    EventModel,
    IdentityModel,
    ProfileModel,
    UserRoleModel,
)


@pytest.mark.asyncio
async def test_admin_sees_every_user_with_role(client, admin, staff, reception, no_role):
    response = await client.get("/api/v1/users", headers=admin.headers)

    assert response.status_code == 200
    roles = {row["user_id"]: row["role"] for row in response.json()}
    assert roles == {
        admin.id: "admin",
        staff.id: "staff",
        reception.id: "reception",
        no_role.id: None,
    }


@pytest.mark.asyncio
async def test_non_admin_only_sees_self(client, admin, staff, reception):
    response = await client.get("/api/v1/users", headers=staff.headers)

    assert response.status_code == 200
    assert [(row["user_id"], row["role"]) for row in response.json()] == [(staff.id, "staff")]


@pytest.mark.asyncio
async def test_user_renames_self(client, reception):
    response = await client.patch(
        f"/api/v1/users/{reception.id}/profile",
        json={"display_name": "Front Desk"},
        headers=reception.headers,
    )

    assert response.status_code == 200
    assert response.json()["display_name"] == "Front Desk"


@pytest.mark.asyncio
async def test_user_cannot_rename_someone_else(client, staff, reception):
    response = await client.patch(
        f"/api/v1/users/{reception.id}/profile",
        json={"display_name": "Hijacked"},
        headers=staff.headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_admin_revokes_role_and_access_stops_at_once(client, admin, staff):
    before = await client.post("/api/v1/events", json={"name": "Before"}, headers=staff.headers)
    assert before.status_code == 201

    response = await client.delete(f"/api/v1/users/{staff.id}/role", headers=admin.headers)
    assert response.status_code == 204

    me = await client.get("/api/v1/auth/me", headers=staff.headers)
    assert me.status_code == 200
    assert me.json()["role"] is None

    after = await client.post("/api/v1/events", json={"name": "After"}, headers=staff.headers)
    assert after.status_code == 403

    events = await client.get("/api/v1/events", headers=staff.headers)
    assert events.status_code == 200
    assert events.json() == []


@pytest.mark.asyncio
async def test_revoking_without_role_is_not_found(client, admin, no_role):
    response = await client.delete(f"/api/v1/users/{no_role.id}/role", headers=admin.headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_staff_cannot_revoke_roles(client, staff, reception, db_session):
    response = await client.delete(f"/api/v1/users/{reception.id}/role", headers=staff.headers)

    assert response.status_code == 403
    row = await db_session.scalar(select(UserRoleModel).where(UserRoleModel.user_id == reception.id))
    assert row is not None


@pytest.mark.asyncio
async def test_admin_removes_user(client, admin, staff, db_session):
    response = await client.delete(f"/api/v1/users/{staff.id}", headers=admin.headers)

    assert response.status_code == 204
    identity = await db_session.get(IdentityModel, staff.id)
    await db_session.refresh(identity)
    assert identity.is_active is False
    assert identity.role_revoked_at is not None
    profile = await db_session.scalar(select(ProfileModel).where(ProfileModel.user_id == staff.id))
    assert profile is None
    role = await db_session.scalar(select(UserRoleModel).where(UserRoleModel.user_id == staff.id))
    assert role is None

    me = await client.get("/api/v1/auth/me", headers=staff.headers)
    assert me.status_code == 401


@pytest.mark.asyncio
async def test_admin_cannot_remove_self(client, admin):
    response = await client.delete(f"/api/v1/users/{admin.id}", headers=admin.headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_removing_unknown_user(client, admin):
    response = await client.delete("/api/v1/users/does-not-exist", headers=admin.headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_removed_user_events_and_guests_survive(client, admin, staff, db_session):
    event = await client.post("/api/v1/events", json={"name": "Staff Party"}, headers=staff.headers)
    event_id = event.json()["id"]
    guest = await client.post(
        f"/api/v1/events/{event_id}/guests", json={"name": "Ana"}, headers=staff.headers
    )
    assert guest.status_code == 201

    response = await client.delete(f"/api/v1/users/{staff.id}", headers=admin.headers)
    assert response.status_code == 204

    db_session.expunge_all()
    assert await db_session.get(EventModel, event_id) is not None
    guests = await client.get(f"/api/v1/events/{event_id}/guests", headers=admin.headers)
    assert [g["name"] for g in guests.json()] == ["Ana"]
    logs = await client.get(f"/api/v1/events/{event_id}/activity-logs", headers=admin.headers)
    assert [entry["user_id"] for entry in logs.json()] == [staff.id]


@pytest.mark.asyncio
async def test_removed_user_cannot_log_in_or_sign_up_again(client, admin, staff, password):
    await client.delete(f"/api/v1/users/{staff.id}", headers=admin.headers)

    login = await client.post("/api/v1/auth/login", json={"email": staff.email, "password": password})
    signup = await client.post(
        "/api/v1/auth/signup",
        json={"email": staff.email, "password": password, "access_code": "EQUIPE_2025"},
    )

    assert login.status_code == 401
    assert signup.status_code == 409


@pytest.mark.asyncio
async def test_revoked_user_cannot_regain_a_role_by_signing_up_again(client, admin, staff, password):
    revoked = await client.delete(f"/api/v1/users/{staff.id}/role", headers=admin.headers)
    assert revoked.status_code == 204

    for code in ("EQUIPE_2025", "RECEPCAO_EVENTO", "MASTER_FLORIPA"):
        signup = await client.post(
            "/api/v1/auth/signup",
            json={"email": staff.email, "password": password, "access_code": code},
        )
        assert signup.status_code == 400

    me = await client.get("/api/v1/auth/me", headers=staff.headers)
    assert me.status_code == 200
    assert me.json()["role"] is None


@pytest.mark.asyncio
async def test_admin_resets_a_password(client, admin, reception, password):
    response = await client.post(
        f"/api/v1/users/{reception.id}/password",
        json={"password": "NewSecret2026"},
        headers=admin.headers,
    )
    assert response.status_code == 204

    old = await client.post("/api/v1/auth/login", json={"email": reception.email, "password": password})
    new = await client.post(
        "/api/v1/auth/login", json={"email": reception.email, "password": "NewSecret2026"}
    )
    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [AppRole.STAFF, AppRole.RECEPTION, None])
async def test_only_admins_reset_passwords(client, create_user, reception, role):
    caller = await create_user(role)

    response = await client.post(
        f"/api/v1/users/{reception.id}/password",
        json={"password": "NewSecret2026"},
        headers=caller.headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_password_reset_checks_strength_and_user(client, admin, reception):
    weak = await client.post(
        f"/api/v1/users/{reception.id}/password",
        json={"password": "short"},
        headers=admin.headers,
    )
    missing = await client.post(
        "/api/v1/users/does-not-exist/password",
        json={"password": "NewSecret2026"},
        headers=admin.headers,
    )

    assert weak.status_code == 400
    assert missing.status_code == 404
