"""Event repository for database operations."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.infrastructure.persistence.models import EventModel


class EventRepository:
    """Repository for event database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, event: EventModel) -> EventModel:
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def get_by_id(self, event_id: str) -> EventModel | None:
        result = await self.session.execute(
            select(EventModel).where(EventModel.id == event_id)
        )
        return result.scalar_one_or_none()

    async def get_owner_id(self, event_id: str) -> str | None:
        """Return the identity that created an event, or None if it does not exist."""
        result = await self.session.execute(
            select(EventModel.user_id).where(EventModel.id == event_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[EventModel]:
        """List events, most recently created first."""
        result = await self.session.execute(
            select(EventModel).order_by(EventModel.created_at.desc(), EventModel.id)
        )
        return list(result.scalars().all())

    async def update(self, event: EventModel, values: dict[str, Any]) -> EventModel:
        for key, value in values.items():
            setattr(event, key, value)
        await self.session.flush()
        return event

    async def delete(self, event: EventModel) -> None:
        await self.session.delete(event)
        await self.session.flush()
