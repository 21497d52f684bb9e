"""Staff roster of an event: the crew working it, and their check-in."""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.core.logging import get_logger
from guestgate.domain.exceptions import NotFoundError
from guestgate.domain.services.activity_log_service import ActivityAction, ActivityLogService
from guestgate.domain.services.event_service import EventService
from guestgate.domain.services.guest_import import matches_search
from guestgate.domain.services.guest_service import stamp_check_in
from guestgate.domain.services.policy_gate import PolicyGate
from guestgate.infrastructure.persistence.models import EventStaffModel
from guestgate.infrastructure.persistence.repositories import EventStaffRepository

logger = get_logger(__name__)


class EventStaffService:
    """Roster operations for one caller.

    Works like the guest list, except that the roster is never visible on
    the public channel. Every write is logged to the activity log in the
    same transaction.
    """

    def __init__(self, session: AsyncSession, gate: PolicyGate) -> None:
        self.session = session
        self.gate = gate
        self.repo = EventStaffRepository(session)
        self.events = EventService(session, gate)
        self.activity = ActivityLogService(session, gate)

    async def list_staff(self, event_id: str, search: str | None = None) -> list[EventStaffModel]:
        """Crew of an event by name, optionally filtered by name or function."""
        await self.events.get_event(event_id)
        await self.gate.authorize("event_staff", "select", {"event_id": event_id})
        members = await self.repo.list_by_event(event_id)
        return [member for member in members if matches_search(search, member.name, member.role)]

    async def _get_member(self, event_id: str, member_id: str) -> EventStaffModel:
        await self.events.get_event(event_id)
        member = await self.repo.get(event_id, member_id)
        if member is None:
            raise NotFoundError("Staff member", member_id)
        return member

    async def add_member(self, event_id: str, values: dict[str, Any]) -> EventStaffModel:
        await self.events.get_event(event_id)
        values = {"checked_in": False, **values}
        member = EventStaffModel(id=str(uuid.uuid4()), event_id=event_id, **values)
        if member.checked_in and member.checkin_time is None:
            member.checkin_time = datetime.now(timezone.utc)
        await self.gate.authorize("event_staff", "insert", member)
        await self.repo.create(member)
        await self.activity.record(event_id, ActivityAction.STAFF_ADDED, member.name)
        await self.session.commit()
        return member

    async def update_member(self, event_id: str, member_id: str, values: dict[str, Any]) -> EventStaffModel:
        """Change roster fields. Reception may only touch the check-in fields."""
        member = await self._get_member(event_id, member_id)
        values = stamp_check_in(values, member.checked_in, member.checkin_time)
        await self.gate.authorize("event_staff", "update", member, changes=values.keys())
        await self.repo.update(member, values)
        await self.activity.record(event_id, ActivityAction.STAFF_UPDATED, member.name)
        await self.session.commit()
        return member

    async def toggle_check_in(self, event_id: str, member_id: str) -> EventStaffModel:
        member = await self._get_member(event_id, member_id)
        checked_in = not member.checked_in
        values = {
            "checked_in": checked_in,
            "checkin_time": datetime.now(timezone.utc) if checked_in else None,
        }
        await self.gate.authorize("event_staff", "update", member, changes=values.keys())
        await self.repo.update(member, values)
        action = ActivityAction.STAFF_CHECK_IN if checked_in else ActivityAction.STAFF_CHECK_OUT
        await self.activity.record(event_id, action, member.name)
        await self.session.commit()

        logger.info("Staff check-in toggled", event_id=event_id, member_id=member.id, checked_in=checked_in)
        return member

    async def delete_member(self, event_id: str, member_id: str) -> None:
        member = await self._get_member(event_id, member_id)
        await self.gate.authorize("event_staff", "delete", member)
        await self.repo.delete(member)
        await self.activity.record(event_id, ActivityAction.STAFF_DELETED, member.name)
        await self.session.commit()
