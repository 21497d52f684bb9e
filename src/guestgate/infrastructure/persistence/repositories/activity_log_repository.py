"""Activity log repository for database operations.

Entries are append-only: the repository offers no update or delete.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.infrastructure.persistence.models import ActivityLogModel

DEFAULT_LOG_LIMIT = 100


class ActivityLogRepository:
    """Repository for activity log database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, entry: ActivityLogModel) -> ActivityLogModel:
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def list_recent(self, event_id: str, limit: int = DEFAULT_LOG_LIMIT) -> list[ActivityLogModel]:
        """List the latest entries of an event, newest first.

        Args:
            event_id: Event whose log is read.
            limit: Maximum number of entries.

        Returns:
            Up to ``limit`` log entries.
        """
        result = await self.session.execute(
            select(ActivityLogModel)
            .where(ActivityLogModel.event_id == event_id)
            .order_by(ActivityLogModel.created_at.desc(), ActivityLogModel.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
