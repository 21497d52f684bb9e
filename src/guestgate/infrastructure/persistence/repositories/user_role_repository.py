"""Role store: the durable user to role mapping.

Rows are inserted once and deleted by an admin. There is no update: a role
change is a delete followed by a fresh assignment.
"""

import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.domain.entities import AppRole
from guestgate.domain.exceptions import NotFoundError, RoleAlreadyAssignedError
from guestgate.infrastructure.persistence.models import UserRoleModel


def is_user_role_conflict(error: IntegrityError) -> bool:
    """Tell a duplicate ``user_id`` apart from other integrity failures.

    SQLite reports the column ("user_roles.user_id"), PostgreSQL the
    constraint name.
    """
    message = str(error.orig).lower()
    return "uq_user_roles_user_id" in message or "user_roles.user_id" in message


class UserRoleRepository:
    """Repository for role assignment rows."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def insert(self, user_id: str, role: AppRole) -> UserRoleModel:
        """Insert the single role row of a user.

        The unique constraint on ``user_id`` decides between concurrent
        inserts. On failure the session is rolled back.

        Args:
            user_id: Identity receiving the role.
            role: Role to store.

        Returns:
            Created role model.

        Raises:
            RoleAlreadyAssignedError: If the user already has a row.
            NotFoundError: If the identity does not exist.
        """
        row = UserRoleModel(id=str(uuid.uuid4()), user_id=user_id, role=role.value)
        self.session.add(row)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            if is_user_role_conflict(e):
                raise RoleAlreadyAssignedError(user_id) from e
            raise NotFoundError("User", user_id) from e
        return row

    async def get_by_user_id(self, user_id: str) -> UserRoleModel | None:
        """Get the role row of a user.

        Args:
            user_id: Identity ID.

        Returns:
            Role model if the user holds a role, None otherwise.
        """
        result = await self.session.execute(
            select(UserRoleModel).where(UserRoleModel.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def delete_by_user_id(self, user_id: str) -> bool:
        """Delete the role row of a user.

        Returns:
            True if a row was deleted.
        """
        result = await self.session.execute(
            delete(UserRoleModel).where(UserRoleModel.user_id == user_id)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def list_all(self) -> list[UserRoleModel]:
        """List every role row, oldest first."""
        result = await self.session.execute(
            select(UserRoleModel).order_by(UserRoleModel.created_at, UserRoleModel.id)
        )
        return list(result.scalars().all())

    async def count_by_role(self, role: AppRole) -> int:
        result = await self.session.execute(
            select(func.count(UserRoleModel.id)).where(UserRoleModel.role == role.value)
        )
        return result.scalar_one() or 0
