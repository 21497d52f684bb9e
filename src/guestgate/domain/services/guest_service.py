"""Guest list management and check-in."""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.core.hooks import HookEvent, HookRegistry
from guestgate.core.logging import get_logger
from guestgate.domain.entities import HookContext
from guestgate.domain.exceptions import NotFoundError, ValidationFailedError
from guestgate.domain.services.activity_log_service import ActivityAction, ActivityLogService
from guestgate.domain.services.event_service import EventService
from guestgate.domain.services.guest_import import extract_guests, matches_search
from guestgate.domain.services.policy_gate import PolicyGate
from guestgate.infrastructure.persistence.models import GuestModel
from guestgate.infrastructure.persistence.repositories import GuestRepository

logger = get_logger(__name__)


def stamp_check_in(values: dict[str, Any], checked_in: bool, checkin_time: datetime | None) -> dict[str, Any]:
    """Fill in ``checkin_time`` when an update sets ``checked_in`` without it.

    Checking in keeps an existing stamp or takes the current time; checking
    out clears it.
    """
    if "checked_in" not in values or "checkin_time" in values:
        return values
    if not values["checked_in"]:
        stamp = None
    elif checked_in and checkin_time is not None:
        stamp = checkin_time
    else:
        stamp = datetime.now(timezone.utc)
    return {**values, "checkin_time": stamp}


class GuestService:
    """Guest operations for one caller.

    Every write is logged to the activity log in the same transaction and
    announced on ``on_guest_after_change`` once committed.
    """

    def __init__(
        self,
        session: AsyncSession,
        gate: PolicyGate,
        hook_registry: HookRegistry | None = None,
    ) -> None:
        self.session = session
        self.gate = gate
        self.hook_registry = hook_registry
        self.repo = GuestRepository(session)
        self.events = EventService(session, gate)
        self.activity = ActivityLogService(session, gate)

    async def list_guests(self, event_id: str, search: str | None = None) -> list[GuestModel]:
        """Guests of an event by name, optionally filtered by name or company."""
        await self.events.get_event(event_id)
        await self.gate.authorize("guests", "select", {"event_id": event_id})
        guests = await self.repo.list_by_event(event_id)
        return [guest for guest in guests if matches_search(search, guest.name, guest.company)]

    async def _get_guest(self, event_id: str, guest_id: str) -> GuestModel:
        await self.events.get_event(event_id)
        guest = await self.repo.get(event_id, guest_id)
        if guest is None:
            raise NotFoundError("Guest", guest_id)
        return guest

    async def add_guest(self, event_id: str, values: dict[str, Any]) -> GuestModel:
        """Add one guest to an event."""
        await self.events.get_event(event_id)
        values = {"checked_in": False, **values}
        guest = GuestModel(id=str(uuid.uuid4()), event_id=event_id, **values)
        if guest.checked_in and guest.checkin_time is None:
            guest.checkin_time = datetime.now(timezone.utc)
        await self.gate.authorize("guests", "insert", guest)
        await self.repo.create(guest)
        await self.activity.record(event_id, ActivityAction.GUEST_ADDED, guest.name)
        await self.session.commit()

        await self._announce(guest, "insert")
        return guest

    async def update_guest(self, event_id: str, guest_id: str, values: dict[str, Any]) -> GuestModel:
        """Change guest fields.

        Reception may only touch the check-in fields. Setting ``checked_in``
        alone stamps or clears ``checkin_time`` like the toggle does.
        """
        guest = await self._get_guest(event_id, guest_id)
        values = stamp_check_in(values, guest.checked_in, guest.checkin_time)
        await self.gate.authorize("guests", "update", guest, changes=values.keys())
        await self.repo.update(guest, values)
        await self.activity.record(event_id, ActivityAction.GUEST_UPDATED, guest.name)
        await self.session.commit()

        await self._announce(guest, "update")
        return guest

    async def toggle_check_in(self, event_id: str, guest_id: str) -> GuestModel:
        """Flip a guest between checked in and not checked in.

        Checking in stamps ``checkin_time``; checking out clears it.
        """
        guest = await self._get_guest(event_id, guest_id)
        checked_in = not guest.checked_in
        values = {
            "checked_in": checked_in,
            "checkin_time": datetime.now(timezone.utc) if checked_in else None,
        }
        await self.gate.authorize("guests", "update", guest, changes=values.keys())
        await self.repo.update(guest, values)
        action = ActivityAction.CHECK_IN if checked_in else ActivityAction.CHECK_OUT
        await self.activity.record(event_id, action, guest.name)
        await self.session.commit()

        logger.info("Guest check-in toggled", event_id=event_id, guest_id=guest.id, checked_in=checked_in)
        await self._announce(guest, "update")
        return guest

    async def delete_guest(self, event_id: str, guest_id: str) -> None:
        guest = await self._get_guest(event_id, guest_id)
        await self.gate.authorize("guests", "delete", guest)
        await self.repo.delete(guest)
        await self.activity.record(event_id, ActivityAction.GUEST_DELETED, guest.name)
        await self.session.commit()

        await self._announce(guest, "delete")

    async def import_guests(self, event_id: str, rows: list[dict[str, Any]]) -> list[GuestModel]:
        """Add the guests found in spreadsheet rows.

        Raises:
            ValidationFailedError: No row has a recognisable name column.
        """
        await self.events.get_event(event_id)
        extracted = extract_guests(rows)
        if not extracted:
            raise ValidationFailedError(
                "No valid guests found. Check that the sheet has a name column."
            )

        guests = [
            GuestModel(id=str(uuid.uuid4()), event_id=event_id, checked_in=False, **values)
            for values in extracted
        ]
        for guest in guests:
            await self.gate.authorize("guests", "insert", guest)
        await self.repo.create_many(guests)
        await self.activity.record(event_id, ActivityAction.GUESTS_IMPORTED, f"{len(guests)} guests")
        await self.session.commit()

        logger.info("Guests imported", event_id=event_id, count=len(guests), skipped=len(rows) - len(guests))
        for guest in guests:
            await self._announce(guest, "insert")
        return guests

    async def self_check_in(self, event_id: str, values: dict[str, Any]) -> GuestModel:
        """Register and check in a walk-up guest from the public screen."""
        await self.events.get_event(event_id)
        guest = GuestModel(
            id=str(uuid.uuid4()),
            event_id=event_id,
            checked_in=True,
            checkin_time=datetime.now(timezone.utc),
            **values,
        )
        await self.gate.authorize("guests", "insert", guest)
        await self.repo.create(guest)
        await self.activity.record(event_id, ActivityAction.SELF_CHECK_IN, f"{guest.name} (Via Mobile)")
        await self.session.commit()

        logger.info("Guest self check-in", event_id=event_id, guest_id=guest.id)
        await self._announce(guest, "insert")
        return guest

    async def _announce(self, guest: GuestModel, change: str) -> None:
        if self.hook_registry is None:
            return
        await self.hook_registry.trigger(
            HookEvent.ON_GUEST_AFTER_CHANGE,
            data={"event_id": guest.event_id, "guest_id": guest.id, "change": change},
            context=HookContext(user_id=self.gate.caller.user_id),
            filters={"event_id": guest.event_id},
        )
