"""Identity repository for the local identity provider."""

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.infrastructure.persistence.models import IdentityModel


class IdentityRepository:
    """Repository for identity database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, identity: IdentityModel) -> IdentityModel:
        """Create a new identity.

        Args:
            identity: Identity model to create.

        Returns:
            Created identity model.
        """
        self.session.add(identity)
        await self.session.flush()
        return identity

    async def get_by_id(self, user_id: str) -> IdentityModel | None:
        result = await self.session.execute(
            select(IdentityModel).where(IdentityModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> IdentityModel | None:
        """Get an identity by email, compared lowercased."""
        result = await self.session.execute(
            select(IdentityModel).where(IdentityModel.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def update_last_login(self, user_id: str) -> None:
        await self.session.execute(
            update(IdentityModel)
            .where(IdentityModel.id == user_id)
            .values(last_login=datetime.now(timezone.utc))
        )
        await self.session.flush()

    async def update_password(self, user_id: str, password_hash: str) -> bool:
        result = await self.session.execute(
            update(IdentityModel)
            .where(IdentityModel.id == user_id)
            .values(password_hash=password_hash)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def mark_role_revoked(self, user_id: str) -> None:
        """Stamp ``role_revoked_at``. The stamp is never cleared."""
        await self.session.execute(
            update(IdentityModel)
            .where(IdentityModel.id == user_id, IdentityModel.role_revoked_at.is_(None))
            .values(role_revoked_at=datetime.now(timezone.utc))
        )
        await self.session.flush()

    async def deactivate(self, user_id: str) -> bool:
        """Disable login for an identity, keeping the row and everything it owns.

        Returns:
            True if a row was updated.
        """
        result = await self.session.execute(
            update(IdentityModel)
            .where(IdentityModel.id == user_id)
            .values(is_active=False)
        )
        await self.session.flush()
        return result.rowcount > 0
