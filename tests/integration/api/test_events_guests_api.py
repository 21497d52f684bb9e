"""Integration tests for events, guests and the activity log."""

import pytest
from sqlalchemy import select

from guestgate.infrastructure.persistence.models import ActivityLogModel, GuestModel


async def make_event(client, user, **fields):
    response = await client.post(
        "/api/v1/events",
        json={"name": "Tech Summit", **fields},
        headers=user.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def make_guest(client, user, event_id, name="Maria Souza", **fields):
    response = await client.post(
        f"/api/v1/events/{event_id}/guests",
        json={"name": name, **fields},
        headers=user.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestEvents:
    @pytest.mark.asyncio
    async def test_staff_creates_event_with_defaults(self, client, staff):
        event = await make_event(client, staff, date="2026-11-20", wifi_ssid="Summit")

        assert event["user_id"] == staff.id
        assert event["primary_color"] == "#f37021"
        assert event["event_logo_size"] == 150
        assert event["wifi_ssid"] == "Summit"

    @pytest.mark.asyncio
    async def test_reception_cannot_create_events(self, client, reception):
        response = await client.post("/api/v1/events", json={"name": "Nope"}, headers=reception.headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_colour_is_rejected(self, client, staff):
        response = await client.post(
            "/api/v1/events",
            json={"name": "Bad", "primary_color": "orange"},
            headers=staff.headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_every_role_holder_sees_all_events(self, client, admin, staff, reception, no_role):
        await make_event(client, admin, name="Admin Event")
        await make_event(client, staff, name="Staff Event")

        for user, expected in ((reception, 2), (staff, 2), (admin, 2), (no_role, 0)):
            response = await client.get("/api/v1/events", headers=user.headers)
            assert response.status_code == 200
            assert len(response.json()) == expected

    @pytest.mark.asyncio
    async def test_staff_updates_settings_and_explicit_null_keeps_required_fields(self, client, admin, staff):
        event = await make_event(client, admin)

        response = await client.patch(
            f"/api/v1/events/{event['id']}",
            json={"name": None, "wifi_pass": "guest2026", "primary_color": None},
            headers=staff.headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Tech Summit"
        assert body["primary_color"] == "#f37021"
        assert body["wifi_pass"] == "guest2026"

    @pytest.mark.asyncio
    async def test_staff_deletes_only_own_events(self, client, admin, staff):
        own = await make_event(client, staff, name="Mine")
        other = await make_event(client, admin, name="Theirs")

        denied = await client.delete(f"/api/v1/events/{other['id']}", headers=staff.headers)
        allowed = await client.delete(f"/api/v1/events/{own['id']}", headers=staff.headers)

        assert denied.status_code == 403
        assert allowed.status_code == 204
        missing = await client.get(f"/api/v1/events/{own['id']}", headers=staff.headers)
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_admin_deletes_any_event(self, client, admin, staff):
        event = await make_event(client, staff)

        response = await client.delete(f"/api/v1/events/{event['id']}", headers=admin.headers)

        assert response.status_code == 204


class TestGuests:
    @pytest.mark.asyncio
    async def test_staff_adds_and_lists_guests(self, client, staff, reception):
        event = await make_event(client, staff)
        await make_guest(client, staff, event["id"], name="Bruno", company="ACME", role="CTO")

        response = await client.get(f"/api/v1/events/{event['id']}/guests", headers=reception.headers)

        assert response.status_code == 200
        guests = response.json()
        assert [(g["name"], g["company"], g["role"], g["checked_in"]) for g in guests] == [
            ("Bruno", "ACME", "CTO", False)
        ]

    @pytest.mark.asyncio
    async def test_reception_cannot_add_guests(self, client, staff, reception):
        event = await make_event(client, staff)

        response = await client.post(
            f"/api/v1/events/{event['id']}/guests",
            json={"name": "Sneaky"},
            headers=reception.headers,
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_reception_toggles_check_in(self, client, staff, reception, db_session):
        event = await make_event(client, staff)
        guest = await make_guest(client, staff, event["id"])
        url = f"/api/v1/events/{event['id']}/guests/{guest['id']}/check-in"

        checked_in = await client.post(url, headers=reception.headers)
        assert checked_in.status_code == 200
        assert checked_in.json()["checked_in"] is True
        assert checked_in.json()["checkin_time"] is not None

        checked_out = await client.post(url, headers=reception.headers)
        assert checked_out.json()["checked_in"] is False
        assert checked_out.json()["checkin_time"] is None

        actions = (
            await db_session.execute(
                select(ActivityLogModel.action).where(ActivityLogModel.user_id == reception.id)
            )
        ).scalars().all()
        assert sorted(actions) == ["Check-in", "Check-out"]

    @pytest.mark.asyncio
    async def test_reception_can_only_change_check_in_fields(self, client, staff, reception):
        event = await make_event(client, staff)
        guest = await make_guest(client, staff, event["id"])
        url = f"/api/v1/events/{event['id']}/guests/{guest['id']}"

        renamed = await client.patch(url, json={"name": "Other Name"}, headers=reception.headers)
        checked = await client.patch(url, json={"checked_in": True}, headers=reception.headers)

        assert renamed.status_code == 403
        assert checked.status_code == 200
        assert checked.json()["name"] == "Maria Souza"
        assert checked.json()["checked_in"] is True

    @pytest.mark.asyncio
    async def test_patching_checked_in_stamps_and_clears_the_time(self, client, staff, reception):
        event = await make_event(client, staff)
        guest = await make_guest(client, staff, event["id"])
        url = f"/api/v1/events/{event['id']}/guests/{guest['id']}"

        checked = await client.patch(url, json={"checked_in": True}, headers=reception.headers)
        assert checked.status_code == 200
        stamped_at = checked.json()["checkin_time"]
        assert stamped_at is not None

        again = await client.patch(url, json={"checked_in": True}, headers=reception.headers)
        assert again.json()["checkin_time"] == stamped_at

        unchecked = await client.patch(url, json={"checked_in": False}, headers=reception.headers)
        assert unchecked.status_code == 200
        assert unchecked.json()["checked_in"] is False
        assert unchecked.json()["checkin_time"] is None

    @pytest.mark.asyncio
    async def test_explicit_checkin_time_is_kept(self, client, staff):
        event = await make_event(client, staff)
        guest = await make_guest(client, staff, event["id"])

        response = await client.patch(
            f"/api/v1/events/{event['id']}/guests/{guest['id']}",
            json={"checked_in": True, "checkin_time": "2026-11-20T09:30:00"},
            headers=staff.headers,
        )

        assert response.status_code == 200
        assert response.json()["checkin_time"].startswith("2026-11-20T09:30:00")

    @pytest.mark.asyncio
    async def test_search_ignores_case_and_accents(self, client, staff, reception):
        event = await make_event(client, staff)
        await make_guest(client, staff, event["id"], name="José Antônio", company="Globo")
        await make_guest(client, staff, event["id"], name="Maria Souza", company="Açaí Tech")
        await make_guest(client, staff, event["id"], name="Pedro Alves")
        url = f"/api/v1/events/{event['id']}/guests"

        async def names(search):
            response = await client.get(url, params={"search": search}, headers=reception.headers)
            assert response.status_code == 200
            return [guest["name"] for guest in response.json()]

        assert await names("jose") == ["José Antônio"]
        assert await names("ACAI") == ["Maria Souza"]
        assert await names("a") == ["José Antônio", "Maria Souza", "Pedro Alves"]
        assert await names("   ") == ["José Antônio", "Maria Souza", "Pedro Alves"]
        assert await names("nobody") == []

    @pytest.mark.asyncio
    async def test_only_admin_deletes_guests(self, client, admin, staff, db_session):
        event = await make_event(client, staff)
        guest = await make_guest(client, staff, event["id"])
        url = f"/api/v1/events/{event['id']}/guests/{guest['id']}"

        denied = await client.delete(url, headers=staff.headers)
        allowed = await client.delete(url, headers=admin.headers)

        assert denied.status_code == 403
        assert allowed.status_code == 204
        assert await db_session.get(GuestModel, guest["id"]) is None

    @pytest.mark.asyncio
    async def test_guest_of_another_event_is_not_found(self, client, staff):
        first = await make_event(client, staff, name="First")
        second = await make_event(client, staff, name="Second")
        guest = await make_guest(client, staff, first["id"])

        response = await client.post(
            f"/api/v1/events/{second['id']}/guests/{guest['id']}/check-in",
            headers=staff.headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_import_rows_with_portuguese_headers(self, client, staff):
        event = await make_event(client, staff)
        rows = [
            {"Nome Completo": "Ana Lima", "Empresa": "ACME", "Cargo": "CEO"},
            {"Nome Completo": "", "Empresa": "Ghost Inc"},
            {"Nome Completo": "João Reis", "Empresa": None, "Cargo": "Dev"},
        ]

        response = await client.post(
            f"/api/v1/events/{event['id']}/guests/import",
            json={"rows": rows},
            headers=staff.headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["imported"] == 2
        assert body["skipped"] == 1
        assert [(g["name"], g["company"], g["role"]) for g in body["guests"]] == [
            ("Ana Lima", "ACME", "CEO"),
            ("João Reis", None, "Dev"),
        ]

    @pytest.mark.asyncio
    async def test_import_without_name_column(self, client, staff):
        event = await make_event(client, staff)

        response = await client.post(
            f"/api/v1/events/{event['id']}/guests/import",
            json={"rows": [{"Email": "a@example.com"}]},
            headers=staff.headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_guests_of_unknown_event(self, client, staff):
        response = await client.get("/api/v1/events/missing/guests", headers=staff.headers)

        assert response.status_code == 404


class TestActivityLog:
    @pytest.mark.asyncio
    async def test_log_is_newest_first(self, client, staff):
        event = await make_event(client, staff)
        guest = await make_guest(client, staff, event["id"])
        await client.post(
            f"/api/v1/events/{event['id']}/guests/{guest['id']}/check-in",
            headers=staff.headers,
        )

        response = await client.get(f"/api/v1/events/{event['id']}/activity-logs", headers=staff.headers)

        assert response.status_code == 200
        entries = response.json()
        assert [entry["action"] for entry in entries] == ["Check-in", "Added"]
        assert entries[0]["user_email"] == staff.email
        assert entries[0]["details"] == "Maria Souza"

    @pytest.mark.asyncio
    async def test_limit(self, client, staff):
        event = await make_event(client, staff)
        for index in range(3):
            await make_guest(client, staff, event["id"], name=f"Guest {index}")

        response = await client.get(
            f"/api/v1/events/{event['id']}/activity-logs",
            params={"limit": 2},
            headers=staff.headers,
        )

        assert [entry["details"] for entry in response.json()] == ["Guest 2", "Guest 1"]

    @pytest.mark.asyncio
    async def test_reception_reads_log_only_for_own_events(self, client, staff, reception):
        event = await make_event(client, staff)

        response = await client.get(f"/api/v1/events/{event['id']}/activity-logs", headers=reception.headers)

        assert response.status_code == 403
