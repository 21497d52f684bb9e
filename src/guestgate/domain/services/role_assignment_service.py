"""Role assignment: the only way a user obtains a role.

``assign_role_with_code`` runs on the trusted session. It reads access
codes that ordinary callers cannot see and writes the role store that no
policy lets anyone insert into. Callers never choose the role: it is
whatever role the submitted code belongs to at call time.
A role that an admin revoked is never handed out again to the same identity.
"""

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.core.hooks import HookEvent, HookRegistry
from guestgate.core.logging import get_logger
from guestgate.domain.entities import AppRole, HookContext
from guestgate.domain.exceptions import (
    BootstrapAlreadyDoneError,
    InvalidAccessCodeError,
    RoleAlreadyAssignedError,
    StoreUnavailableError,
)
from guestgate.infrastructure.persistence.repositories import (
    AccessCodeRepository,
    IdentityRepository,
    UserRoleRepository,
)

logger = get_logger(__name__)


class RoleAssignmentService:
    """Assigns roles from access codes and performs the bootstrap admin grant."""

    def __init__(self, session: AsyncSession, hook_registry: HookRegistry | None = None) -> None:
        self.session = session
        self.hook_registry = hook_registry
        self.access_codes = AccessCodeRepository(session)
        self.roles = UserRoleRepository(session)
        self.identities = IdentityRepository(session)

    async def assign_role_with_code(self, user_id: str, submitted_code: str) -> AppRole:
        """Give a user the role whose current access code is ``submitted_code``.

        Steps:
            1. Find the role using the code; none means the code is invalid.
            2. Refuse if the user already holds a role, or held one that an
               admin revoked.
            3. Insert the role row. The unique constraint on ``user_id``
               settles concurrent calls that both passed step 2.
            4. Commit and return the role.

        Args:
            user_id: Identity that just signed up.
            submitted_code: Code typed by the user, compared exactly.

        Returns:
            The assigned role.

        Raises:
            InvalidAccessCodeError: No role uses the code. Nothing is written.
            RoleAlreadyAssignedError: The user holds a role or had it revoked.
            StoreUnavailableError: The database could not be reached. The whole
                operation may be retried.
        """
        try:
            role = await self.access_codes.find_role_by_code(submitted_code) if submitted_code else None
            if role is None:
                # The submitted code is never logged
                logger.info("Role assignment rejected: invalid access code", user_id=user_id)
                raise InvalidAccessCodeError()

            if await self.roles.get_by_user_id(user_id) is not None:
                logger.info("Role assignment rejected: role already assigned", user_id=user_id)
                raise RoleAlreadyAssignedError(user_id)

            identity = await self.identities.get_by_id(user_id)
            if identity is not None and identity.role_revoked_at is not None:
                logger.warning("Role assignment rejected: role was revoked", user_id=user_id)
                raise RoleAlreadyAssignedError(user_id)

            try:
                await self.roles.insert(user_id, role)
            except RoleAlreadyAssignedError:
                logger.info("Role assignment lost a concurrent race", user_id=user_id)
                raise
            await self.session.commit()
        except (OperationalError, InterfaceError) as e:
            await self.session.rollback()
            logger.error("Role assignment failed: store unavailable", user_id=user_id, error=str(e))
            raise StoreUnavailableError() from e

        logger.info("Role assigned", user_id=user_id, role=role.value)
        await self._after_assign(user_id, role, source="access_code")
        return role

    async def grant_initial_admin(self, user_id: str) -> AppRole:
        """Grant the admin role out of band, once.

        This is how the very first admin comes to exist. It refuses as soon
        as any admin is present.

        Raises:
            BootstrapAlreadyDoneError: An admin already exists.
            RoleAlreadyAssignedError: The user already holds a role.
        """
        if await self.roles.count_by_role(AppRole.ADMIN) > 0:
            raise BootstrapAlreadyDoneError()
        if await self.roles.get_by_user_id(user_id) is not None:
            raise RoleAlreadyAssignedError(user_id)

        await self.roles.insert(user_id, AppRole.ADMIN)
        await self.session.commit()

        logger.warning("Initial admin granted", user_id=user_id)
        await self._after_assign(user_id, AppRole.ADMIN, source="bootstrap")
        return AppRole.ADMIN

    async def _after_assign(self, user_id: str, role: AppRole, source: str) -> None:
        if self.hook_registry is None:
            return
        await self.hook_registry.trigger(
            HookEvent.ON_ROLE_AFTER_ASSIGN,
            data={"user_id": user_id, "role": role.value, "source": source},
            context=HookContext(user_id=user_id, session=self.session),
        )
