"""Event staff repository for database operations."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.infrastructure.persistence.models import EventStaffModel


class EventStaffRepository:
    """Repository for the working crew of events."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, member: EventStaffModel) -> EventStaffModel:
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def get(self, event_id: str, member_id: str) -> EventStaffModel | None:
        """Get a crew member of a specific event."""
        result = await self.session.execute(
            select(EventStaffModel).where(
                EventStaffModel.id == member_id,
                EventStaffModel.event_id == event_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_by_event(self, event_id: str) -> list[EventStaffModel]:
        result = await self.session.execute(
            select(EventStaffModel)
            .where(EventStaffModel.event_id == event_id)
            .order_by(EventStaffModel.name, EventStaffModel.id)
        )
        return list(result.scalars().all())

    async def update(self, member: EventStaffModel, values: dict[str, Any]) -> EventStaffModel:
        for key, value in values.items():
            setattr(member, key, value)
        await self.session.flush()
        return member

    async def delete(self, member: EventStaffModel) -> None:
        await self.session.delete(member)
        await self.session.flush()
