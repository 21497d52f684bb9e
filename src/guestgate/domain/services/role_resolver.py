"""Role resolver: trusted, read-only role lookups.

The resolver reads the role store directly and never goes through the
policy gate, because the gate itself calls it to evaluate rules. Reading
role rows as ordinary data is a different path:
``PolicyGate.authorize("user_roles", "select", row)``.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.domain.entities import AppRole
from guestgate.infrastructure.persistence.repositories import UserRoleRepository


class RoleResolver:
    """Answers "which role does this user hold" for one request.

    Lookups are memoised, so evaluating many rows in one request costs one
    query per user. Create a new resolver per request.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.roles = UserRoleRepository(session)
        self._cache: dict[str, AppRole | None] = {}

    async def role_of(self, user_id: str | None) -> AppRole | None:
        """Return the role of a user, or None if the user holds no role."""
        if not user_id:
            return None
        if user_id not in self._cache:
            row = await self.roles.get_by_user_id(user_id)
            self._cache[user_id] = AppRole(row.role) if row is not None else None
        return self._cache[user_id]

    async def has_role(self, user_id: str | None, role: AppRole | str) -> bool:
        """Tell whether a user holds exactly ``role``. Unknown role names are False."""
        wanted = role if isinstance(role, AppRole) else AppRole.try_parse(role)
        if wanted is None:
            return False
        return await self.role_of(user_id) == wanted

    async def has_any_role(self, user_id: str | None) -> bool:
        return await self.role_of(user_id) is not None

    def forget(self, user_id: str | None = None) -> None:
        """Drop memoised lookups after a role changed in this request."""
        if user_id is None:
            self._cache.clear()
        else:
            self._cache.pop(user_id, None)
