"""Profile repository for database operations."""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.infrastructure.persistence.models import ProfileModel


class ProfileRepository:
    """Repository for profile database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        user_id: str,
        email: str | None,
        display_name: str | None,
    ) -> ProfileModel:
        """Create the profile of an identity.

        Args:
            user_id: Identity ID.
            email: Identity email.
            display_name: Name shown in the dashboard.

        Returns:
            Created profile model.
        """
        profile = ProfileModel(
            id=str(uuid.uuid4()),
            user_id=user_id,
            email=email,
            display_name=display_name,
        )
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def get_by_user_id(self, user_id: str) -> ProfileModel | None:
        result = await self.session.execute(
            select(ProfileModel).where(ProfileModel.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[ProfileModel]:
        """List every profile ordered by creation time."""
        result = await self.session.execute(
            select(ProfileModel).order_by(ProfileModel.created_at, ProfileModel.id)
        )
        return list(result.scalars().all())

    async def update_display_name(self, profile: ProfileModel, display_name: str | None) -> ProfileModel:
        profile.display_name = display_name
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def delete_by_user_id(self, user_id: str) -> bool:
        result = await self.session.execute(
            delete(ProfileModel).where(ProfileModel.user_id == user_id)
        )
        await self.session.flush()
        return result.rowcount > 0
