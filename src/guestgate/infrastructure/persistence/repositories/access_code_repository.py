"""Access code repository for database operations.

This repository reads raw secrets. Only the role assignment service and
the admin-gated ``AccessCodeService`` are allowed to use it.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.domain.entities import AppRole
from guestgate.infrastructure.persistence.models import AccessCodeModel


class AccessCodeRepository:
    """Repository for access code database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_by_role(self, role: AppRole) -> AccessCodeModel | None:
        """Get the access code row of a role.

        Args:
            role: Role to look up.

        Returns:
            Access code model if found, None otherwise.
        """
        result = await self.session.execute(
            select(AccessCodeModel).where(AccessCodeModel.role == role.value)
        )
        return result.scalar_one_or_none()

    async def find_role_by_code(self, code: str) -> AppRole | None:
        """Find the role whose current code equals ``code`` exactly.

        Matching is case-sensitive and considers every role.

        Args:
            code: Code submitted at signup.

        Returns:
            The matching role, or None when no role uses the code.
        """
        result = await self.session.execute(
            select(AccessCodeModel.role).where(AccessCodeModel.code == code).limit(1)
        )
        role = result.scalar_one_or_none()
        return AppRole(role) if role is not None else None

    async def find_role_using_code(self, code: str, excluding: AppRole) -> AppRole | None:
        """Find another role that already uses ``code``."""
        result = await self.session.execute(
            select(AccessCodeModel.role)
            .where(AccessCodeModel.code == code, AccessCodeModel.role != excluding.value)
            .limit(1)
        )
        role = result.scalar_one_or_none()
        return AppRole(role) if role is not None else None

    async def update_code(
        self,
        role: AppRole,
        new_code: str,
        updated_by: str | None,
    ) -> AccessCodeModel | None:
        """Overwrite the code of a role.

        Last write wins. A role without a row is not created here.

        Args:
            role: Role whose code changes.
            new_code: Replacement code.
            updated_by: Admin identity making the change.

        Returns:
            Updated model, or None if the role has no row.
        """
        access_code = await self.get_by_role(role)
        if access_code is None:
            return None

        access_code.code = new_code
        access_code.updated_by = updated_by
        access_code.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        return access_code

    async def list_all(self) -> list[AccessCodeModel]:
        """List every access code row ordered by role."""
        result = await self.session.execute(
            select(AccessCodeModel).order_by(AccessCodeModel.role)
        )
        return list(result.scalars().all())

    async def seed_defaults(self, codes: dict[str, str]) -> list[AppRole]:
        """Insert default codes for roles that have no row yet.

        Existing rows are left untouched, so calling this repeatedly is safe.

        Args:
            codes: Mapping of role name to default code.

        Returns:
            Roles that received a row.
        """
        created = []
        for role in AppRole:
            if await self.get_by_role(role) is not None:
                continue
            self.session.add(
                AccessCodeModel(id=str(uuid.uuid4()), role=role.value, code=codes[role.value])
            )
            created.append(role)
        await self.session.flush()
        return created
