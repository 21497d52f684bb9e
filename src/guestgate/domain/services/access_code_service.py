"""Admin management of access codes."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.core.hooks import HookEvent, HookRegistry
from guestgate.core.logging import get_logger
from guestgate.domain.entities import AppRole, HookContext
from guestgate.domain.exceptions import NotFoundError, ValidationFailedError
from guestgate.domain.services.policy_gate import PolicyGate
from guestgate.infrastructure.persistence.models import AccessCodeModel
from guestgate.infrastructure.persistence.repositories import AccessCodeRepository

logger = get_logger(__name__)


class AccessCodeService:
    """Reads and rotates access codes on behalf of an admin."""

    def __init__(
        self,
        session: AsyncSession,
        gate: PolicyGate,
        hook_registry: HookRegistry | None = None,
    ) -> None:
        self.session = session
        self.gate = gate
        self.hook_registry = hook_registry
        self.repo = AccessCodeRepository(session)

    async def list_access_codes(self) -> list[AccessCodeModel]:
        """Return the current code of every role.

        Raises:
            AccessDeniedError: The caller is not an admin.
        """
        await self.gate.authorize("access_codes", "select")
        return await self.repo.list_all()

    async def update_access_code(self, role: AppRole | str, new_code: str) -> AccessCodeModel:
        """Replace the code of a role.

        Overwrites the previous code; the old code stops working at once.
        Writing the same code twice leaves a single row with that code.

        Raises:
            AccessDeniedError: The caller is not an admin.
            NotFoundError: The role does not exist.
            ValidationFailedError: The code is empty, padded with whitespace
                or used by another role.
        """
        await self.gate.authorize("access_codes", "update", changes=["code"])

        try:
            target = AppRole.parse(role)
        except ValueError as e:
            raise NotFoundError("Role", str(role)) from e

        code = new_code or ""
        if not code.strip():
            raise ValidationFailedError("The access code must not be empty.")
        if code != code.strip():
            # Stored verbatim and matched exactly at signup
            raise ValidationFailedError("The access code must not start or end with whitespace.")

        other = await self.repo.find_role_using_code(code, excluding=target)
        if other is not None:
            raise ValidationFailedError("This access code is already used by another role.")

        try:
            updated = await self.repo.update_code(target, code, updated_by=self.gate.caller.user_id)
        except IntegrityError as e:
            # Another admin gave the same code to a different role meanwhile
            await self.session.rollback()
            raise ValidationFailedError("This access code is already used by another role.") from e
        if updated is None:
            raise NotFoundError("Access code", target.value)
        await self.session.commit()

        logger.info(
            "Access code updated",
            role=target.value,
            updated_by=self.gate.caller.user_id,
        )
        if self.hook_registry is not None:
            await self.hook_registry.trigger(
                HookEvent.ON_ACCESS_CODE_AFTER_UPDATE,
                data={"role": target.value, "updated_by": self.gate.caller.user_id},
                context=HookContext(user_id=self.gate.caller.user_id, session=self.session),
            )
        return updated
