"""Event management."""

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.core.logging import get_logger
from guestgate.domain.exceptions import NotFoundError
from guestgate.domain.services.activity_log_service import ActivityAction, ActivityLogService
from guestgate.domain.services.policy_gate import PolicyGate
from guestgate.infrastructure.persistence.models import EventModel
from guestgate.infrastructure.persistence.repositories import EventRepository

logger = get_logger(__name__)


class EventService:
    """Creates, reads, updates and deletes events through the policy gate."""

    def __init__(self, session: AsyncSession, gate: PolicyGate) -> None:
        self.session = session
        self.gate = gate
        self.repo = EventRepository(session)
        self.activity = ActivityLogService(session, gate)

    async def list_events(self) -> list[EventModel]:
        """Events visible to the caller, newest first."""
        return await self.gate.filter_readable("events", await self.repo.list_all())

    async def get_event(self, event_id: str) -> EventModel:
        """Get one event.

        Raises:
            NotFoundError: The event does not exist.
            AccessDeniedError: The caller may not read it.
        """
        event = await self.repo.get_by_id(event_id)
        if event is None:
            raise NotFoundError("Event", event_id)
        await self.gate.authorize("events", "select", event)
        return event

    async def create_event(self, values: dict[str, Any]) -> EventModel:
        """Create an event owned by the caller."""
        event = EventModel(id=str(uuid.uuid4()), user_id=self.gate.caller.user_id, **values)
        await self.gate.authorize("events", "insert", event)
        await self.repo.create(event)
        await self.session.commit()

        logger.info("Event created", event_id=event.id, user_id=self.gate.caller.user_id)
        return event

    async def update_event(self, event_id: str, values: dict[str, Any]) -> EventModel:
        """Change event settings and log the change."""
        event = await self.get_event(event_id)
        await self.gate.authorize("events", "update", event, changes=values.keys())
        await self.repo.update(event, values)
        await self.activity.record(event.id, ActivityAction.SETTINGS_UPDATED, ", ".join(sorted(values)))
        await self.session.commit()

        logger.info("Event updated", event_id=event.id, fields=sorted(values))
        return event

    async def delete_event(self, event_id: str) -> None:
        event = await self.get_event(event_id)
        await self.gate.authorize("events", "delete", event)
        await self.repo.delete(event)
        await self.session.commit()

        logger.info("Event deleted", event_id=event_id, user_id=self.gate.caller.user_id)
