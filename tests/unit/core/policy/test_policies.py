"""Unit tests for the access policy table."""

import pytest

from guestgate.core.policy import (
    OPERATIONS,
    POLICIES,
    compile_policy,
    evaluate_policy,
    get_policy,
)


def test_every_entry_compiles():
    for table, operations in POLICIES.items():
        for operation in operations:
            assert compile_policy(table, operation) is not None, (table, operation)


def test_every_table_defines_every_operation():
    for table, operations in POLICIES.items():
        assert set(operations) == set(OPERATIONS), table


def test_missing_entries_are_none():
    assert get_policy("sessions", "select") is None
    assert compile_policy("sessions", "select") is None
    assert get_policy("guests", "truncate") is None


def test_role_store_is_never_writable():
    assert POLICIES["user_roles"]["insert"] == "false"
    assert POLICIES["user_roles"]["update"] == "false"


def test_access_codes_cannot_be_created_or_deleted():
    assert POLICIES["access_codes"]["insert"] == "false"
    assert POLICIES["access_codes"]["delete"] == "false"


def test_activity_log_is_append_only():
    assert POLICIES["activity_logs"]["update"] == "false"
    assert POLICIES["activity_logs"]["delete"] == "false"


def _functions(roles):
    async def role_of(uid):
        return roles.get(uid)

    async def has_role(uid, role):
        return roles.get(uid) == role

    async def has_any_role(uid):
        return roles.get(uid) is not None

    def only_fields(changes, allowed):
        return set(changes or ()) <= set(allowed or ())

    async def event_owner(event_id):
        return {"e1": "owner"}.get(event_id)

    return {
        "role_of": role_of,
        "has_role": has_role,
        "has_any_role": has_any_role,
        "only_fields": only_fields,
        "event_owner": event_owner,
    }


async def allowed(table, operation, uid=None, record=None, changes=None, channel="authenticated", roles=None):
    context = {
        "auth": {"uid": uid, "email": None},
        "request": {"channel": channel},
        "record": record or {},
        "changes": changes or [],
    }
    return bool(await evaluate_policy(compile_policy(table, operation), context, _functions(roles or {})))


ROLES = {"a": "admin", "s": "staff", "r": "reception"}


@pytest.mark.asyncio
async def test_access_codes_select_admin_only():
    assert await allowed("access_codes", "select", uid="a", roles=ROLES) is True
    for uid in ("s", "r", "nobody", None):
        assert await allowed("access_codes", "select", uid=uid, roles=ROLES) is False


@pytest.mark.asyncio
async def test_user_roles_select_self_or_admin():
    row = {"user_id": "s", "role": "staff"}

    assert await allowed("user_roles", "select", uid="s", record=row, roles=ROLES) is True
    assert await allowed("user_roles", "select", uid="a", record=row, roles=ROLES) is True
    assert await allowed("user_roles", "select", uid="r", record=row, roles=ROLES) is False


@pytest.mark.asyncio
async def test_self_rule_does_not_match_null_user():
    row = {"user_id": None}
    assert await allowed("profiles", "select", uid=None, record=row, channel="public") is False


@pytest.mark.asyncio
async def test_reception_may_only_touch_check_in_fields():
    assert await allowed("guests", "update", uid="r", changes=["checked_in", "checkin_time"], roles=ROLES)
    assert not await allowed("guests", "update", uid="r", changes=["name"], roles=ROLES)
    assert await allowed("guests", "update", uid="s", changes=["name"], roles=ROLES)


@pytest.mark.asyncio
async def test_public_channel_may_only_insert_checked_in_guests():
    assert await allowed("guests", "insert", record={"checked_in": True}, channel="public")
    assert not await allowed("guests", "insert", record={"checked_in": False}, channel="public")


@pytest.mark.asyncio
async def test_staff_may_delete_only_own_events():
    assert await allowed("events", "delete", uid="s", record={"user_id": "s"}, roles=ROLES)
    assert not await allowed("events", "delete", uid="s", record={"user_id": "a"}, roles=ROLES)
    assert await allowed("events", "delete", uid="a", record={"user_id": "s"}, roles=ROLES)
    assert not await allowed("events", "delete", uid="r", record={"user_id": "r"}, roles=ROLES)


@pytest.mark.asyncio
async def test_activity_log_select_for_event_owner():
    roles = {"owner": "reception", "other": "reception"}

    assert await allowed("activity_logs", "select", uid="owner", record={"event_id": "e1"}, roles=roles)
    assert not await allowed("activity_logs", "select", uid="other", record={"event_id": "e1"}, roles=roles)


@pytest.mark.asyncio
async def test_event_staff_is_hidden_from_the_public_channel():
    assert await allowed("event_staff", "select", uid="r", roles=ROLES)
    assert not await allowed("event_staff", "select", channel="public")
    assert not await allowed("event_staff", "insert", record={"checked_in": True}, channel="public")


@pytest.mark.asyncio
async def test_event_staff_roster_writes():
    assert await allowed("event_staff", "insert", uid="s", roles=ROLES)
    assert not await allowed("event_staff", "insert", uid="r", roles=ROLES)
    assert await allowed("event_staff", "update", uid="r", changes=["checked_in", "checkin_time"], roles=ROLES)
    assert not await allowed("event_staff", "update", uid="r", changes=["role"], roles=ROLES)
    assert not await allowed("event_staff", "delete", uid="s", roles=ROLES)
    assert await allowed("event_staff", "delete", uid="a", roles=ROLES)


@pytest.mark.asyncio
async def test_only_admins_reset_passwords():
    assert await allowed("identities", "update", uid="a", changes=["password"], roles=ROLES)
    assert not await allowed("identities", "update", uid="a", changes=["email"], roles=ROLES)
    for uid in ("s", "r", None):
        assert not await allowed("identities", "update", uid=uid, changes=["password"], roles=ROLES)
    assert not await allowed("identities", "select", uid="a", roles=ROLES)
