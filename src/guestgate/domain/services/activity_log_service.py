"""Activity log: who did what on an event."""

import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.domain.exceptions import NotFoundError
from guestgate.domain.services.policy_gate import PolicyGate
from guestgate.infrastructure.persistence.models import ActivityLogModel
from guestgate.infrastructure.persistence.repositories import (
    ActivityLogRepository,
    EventRepository,
)
from guestgate.infrastructure.persistence.repositories.activity_log_repository import (
    DEFAULT_LOG_LIMIT,
)


class ActivityAction:
    """Action labels written to the log."""

    CHECK_IN = "Check-in"
    CHECK_OUT = "Check-out"
    SELF_CHECK_IN = "Auto Check-in"
    GUEST_ADDED = "Added"
    GUEST_UPDATED = "Updated"
    GUEST_DELETED = "Deleted"
    GUESTS_IMPORTED = "Imported"
    SETTINGS_UPDATED = "Updated settings"
    STAFF_ADDED = "Added staff"
    STAFF_UPDATED = "Updated staff"
    STAFF_DELETED = "Deleted staff"
    STAFF_CHECK_IN = "Staff check-in"
    STAFF_CHECK_OUT = "Staff check-out"


class ActivityLogService:
    """Writes and reads activity entries through the policy gate.

    ``record`` only flushes; the calling service commits together with the
    change being logged.
    """

    def __init__(self, session: AsyncSession, gate: PolicyGate) -> None:
        self.gate = gate
        self.repo = ActivityLogRepository(session)
        self.events = EventRepository(session)

    async def record(self, event_id: str, action: str, details: str | None = None) -> ActivityLogModel:
        entry = ActivityLogModel(
            id=str(uuid.uuid4()),
            event_id=event_id,
            user_id=self.gate.caller.user_id,
            user_email=self.gate.caller.email,
            action=action,
            details=details,
            created_at=datetime.now(timezone.utc),
        )
        await self.gate.authorize("activity_logs", "insert", entry)
        return await self.repo.create(entry)

    async def list_recent(self, event_id: str, limit: int = DEFAULT_LOG_LIMIT) -> list[ActivityLogModel]:
        """Latest entries of an event, newest first.

        Raises:
            NotFoundError: The event does not exist.
            AccessDeniedError: The caller may not read this event's log.
        """
        if await self.events.get_by_id(event_id) is None:
            raise NotFoundError("Event", event_id)
        await self.gate.authorize("activity_logs", "select", {"event_id": event_id})
        return await self.repo.list_recent(event_id, limit)
