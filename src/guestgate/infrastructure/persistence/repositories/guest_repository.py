"""Guest repository for database operations."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.infrastructure.persistence.models import GuestModel


class GuestRepository:
    """Repository for guest database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, guest: GuestModel) -> GuestModel:
        self.session.add(guest)
        await self.session.flush()
        await self.session.refresh(guest)
        return guest

    async def create_many(self, guests: list[GuestModel]) -> list[GuestModel]:
        """Insert several guests in one flush."""
        self.session.add_all(guests)
        await self.session.flush()
        for guest in guests:
            await self.session.refresh(guest)
        return guests

    async def get(self, event_id: str, guest_id: str) -> GuestModel | None:
        """Get a guest of a specific event."""
        result = await self.session.execute(
            select(GuestModel).where(
                GuestModel.id == guest_id,
                GuestModel.event_id == event_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_by_event(self, event_id: str) -> list[GuestModel]:
        """List the guests of an event by name."""
        result = await self.session.execute(
            select(GuestModel)
            .where(GuestModel.event_id == event_id)
            .order_by(GuestModel.name, GuestModel.id)
        )
        return list(result.scalars().all())

    async def update(self, guest: GuestModel, values: dict[str, Any]) -> GuestModel:
        for key, value in values.items():
            setattr(guest, key, value)
        await self.session.flush()
        return guest

    async def delete(self, guest: GuestModel) -> None:
        await self.session.delete(guest)
        await self.session.flush()
