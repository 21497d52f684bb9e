"""User listing, profile edits, password resets, role revocation and user removal.

Revocation is permanent: the identity is stamped with ``role_revoked_at`` and
can never redeem an access code again. Removal disables the identity instead
of deleting it, so the events it created keep their guests and logs.
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.core.hooks import HookEvent, HookRegistry
from guestgate.core.logging import get_logger
from guestgate.domain.entities import AppRole, HookContext
from guestgate.domain.exceptions import NotFoundError, ValidationFailedError
from guestgate.domain.services.password_validator import PasswordValidator
from guestgate.domain.services.policy_gate import PolicyGate
from guestgate.infrastructure.auth.identity_provider import IdentityProvider
from guestgate.infrastructure.persistence.models import ProfileModel
from guestgate.infrastructure.persistence.repositories import (
    IdentityRepository,
    ProfileRepository,
    UserRoleRepository,
)

logger = get_logger(__name__)


@dataclass
class UserSummary:
    """A user as shown in the admin user list."""

    user_id: str
    email: str | None
    display_name: str | None
    role: AppRole | None
    created_at: datetime | None


class UserAdminService:
    """User management on behalf of the caller held by ``gate``."""

    def __init__(
        self,
        session: AsyncSession,
        gate: PolicyGate,
        identity_provider: IdentityProvider,
        hook_registry: HookRegistry | None = None,
        password_validator: PasswordValidator | None = None,
    ) -> None:
        self.session = session
        self.gate = gate
        self.identity_provider = identity_provider
        self.hook_registry = hook_registry
        self.password_validator = password_validator or PasswordValidator()
        self.identities = IdentityRepository(session)
        self.profiles = ProfileRepository(session)
        self.roles = UserRoleRepository(session)

    async def list_users(self) -> list[UserSummary]:
        """Profiles the caller may read, with roles the caller may read.

        Admins see everyone; other users only see themselves.
        """
        profiles = await self.gate.filter_readable("profiles", await self.profiles.list_all())
        roles = await self.gate.filter_readable("user_roles", await self.roles.list_all())
        role_by_user = {row.user_id: AppRole(row.role) for row in roles}

        return [
            UserSummary(
                user_id=profile.user_id,
                email=profile.email,
                display_name=profile.display_name,
                role=role_by_user.get(profile.user_id),
                created_at=profile.created_at,
            )
            for profile in profiles
        ]

    async def get_profile(self, user_id: str) -> ProfileModel:
        profile = await self.profiles.get_by_user_id(user_id)
        if profile is None:
            raise NotFoundError("User", user_id)
        await self.gate.authorize("profiles", "select", profile)
        return profile

    async def update_display_name(self, user_id: str, display_name: str | None) -> ProfileModel:
        profile = await self.get_profile(user_id)
        await self.gate.authorize("profiles", "update", profile, changes=["display_name"])
        await self.profiles.update_display_name(profile, display_name)
        await self.session.commit()
        return profile

    async def reset_password(self, user_id: str, new_password: str) -> None:
        """Set a new password for a user. Admin only.

        Raises:
            AccessDeniedError: The caller is not an admin.
            ValidationFailedError: The password is too weak.
            NotFoundError: The user does not exist.
        """
        await self.gate.authorize("identities", "update", {"id": user_id}, changes=["password"])

        errors = self.password_validator.validate(new_password)
        if errors:
            raise ValidationFailedError("; ".join(error.message for error in errors))

        if not await self.identity_provider.set_password(user_id, new_password):
            raise NotFoundError("User", user_id)
        await self.session.commit()
        logger.warning("Password reset by admin", user_id=user_id, reset_by=self.gate.caller.user_id)

    async def revoke_role(self, user_id: str) -> None:
        """Delete a user's role row for good.

        The user keeps the identity but loses all access, and no access code
        will give them a role again.

        Raises:
            NotFoundError: The user holds no role.
            AccessDeniedError: The caller is not an admin.
        """
        row = await self.roles.get_by_user_id(user_id)
        if row is None:
            raise NotFoundError("Role assignment", user_id)
        await self.gate.authorize("user_roles", "delete", row)

        await self.roles.delete_by_user_id(user_id)
        await self.identities.mark_role_revoked(user_id)
        await self.session.commit()
        self.gate.resolver.forget(user_id)

        logger.warning("Role revoked", user_id=user_id, role=row.role, revoked_by=self.gate.caller.user_id)
        await self._after_revoke(user_id, row.role)

    async def remove_user(self, user_id: str) -> None:
        """Remove a user: role row and profile are deleted, the identity is disabled.

        Events created by the user stay, with their guests and logs.

        Raises:
            ValidationFailedError: Callers cannot remove themselves.
            NotFoundError: The user does not exist.
            AccessDeniedError: The caller is not an admin.
        """
        if user_id == self.gate.caller.user_id:
            raise ValidationFailedError("You cannot remove your own account.")

        profile = await self.profiles.get_by_user_id(user_id)
        row = await self.roles.get_by_user_id(user_id)
        if profile is None and row is None:
            raise NotFoundError("User", user_id)

        await self.gate.authorize("user_roles", "delete", row or {"user_id": user_id})
        await self.gate.authorize("profiles", "delete", profile or {"user_id": user_id})

        await self.roles.delete_by_user_id(user_id)
        await self.profiles.delete_by_user_id(user_id)
        await self.identity_provider.disable_identity(user_id)
        await self.session.commit()
        self.gate.resolver.forget(user_id)

        logger.warning("User removed", user_id=user_id, removed_by=self.gate.caller.user_id)
        if row is not None:
            await self._after_revoke(user_id, row.role)

    async def _after_revoke(self, user_id: str, role: str) -> None:
        if self.hook_registry is None:
            return
        await self.hook_registry.trigger(
            HookEvent.ON_ROLE_AFTER_REVOKE,
            data={"user_id": user_id, "role": role},
            context=HookContext(user_id=self.gate.caller.user_id, session=self.session),
        )
