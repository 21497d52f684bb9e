"""Integration tests for the public display and self check-in screens."""

import pytest
import pytest_asyncio
from sqlalchemy import select

from guestgate.infrastructure.persistence.models import ActivityLogModel, GuestModel


@pytest_asyncio.fixture
async def event(client, staff):
    response = await client.post(
        "/api/v1/events",
        json={"name": "Open Day", "wifi_ssid": "OpenDay", "wifi_pass": "welcome1"},
        headers=staff.headers,
    )
    return response.json()


@pytest.mark.asyncio
async def test_public_event_needs_no_token(client, event):
    response = await client.get(f"/api/v1/public/events/{event['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Open Day"
    assert body["wifi_ssid"] == "OpenDay"
    assert body["wifi_pass"] == "welcome1"
    assert "user_id" not in body


@pytest.mark.asyncio
async def test_public_event_not_found(client):
    response = await client.get("/api/v1/public/events/missing")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_self_check_in(client, event, db_session):
    response = await client.post(
        f"/api/v1/public/events/{event['id']}/self-check-in",
        json={"name": "Walk Up", "company": "Freelancer"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["checked_in"] is True
    assert body["checkin_time"] is not None

    guest = await db_session.get(GuestModel, body["id"])
    assert guest.event_id == event["id"]
    log = await db_session.scalar(
        select(ActivityLogModel).where(ActivityLogModel.event_id == event["id"])
    )
    assert log.action == "Auto Check-in"
    assert log.details == "Walk Up (Via Mobile)"
    assert log.user_id is None


@pytest.mark.asyncio
async def test_public_channel_cannot_reach_private_routes(client, event):
    guests = await client.get(f"/api/v1/events/{event['id']}/guests")
    codes = await client.get("/api/v1/access-codes")

    assert guests.status_code == 401
    assert codes.status_code == 401
