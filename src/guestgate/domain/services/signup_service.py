"""Signup: identity creation followed by role assignment.

The identity is created first and committed on its own. If the role step
fails (wrong code, store outage) the user can simply sign up again with the
same email and password: the existing identity is reused and only the role
step runs again. A second attempt after a successful one therefore reports
"role already assigned".
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.core.logging import get_logger
from guestgate.domain.entities import AppRole
from guestgate.domain.exceptions import (
    IdentityAlreadyExistsError,
    InvalidCredentialsError,
    ValidationFailedError,
)
from guestgate.domain.services.password_validator import PasswordValidator
from guestgate.domain.services.role_assignment_service import RoleAssignmentService
from guestgate.infrastructure.auth.identity_provider import AuthSession, IdentityProvider
from guestgate.infrastructure.persistence.repositories import ProfileRepository

logger = get_logger(__name__)


@dataclass
class SignupResult:
    role: AppRole
    session: AuthSession


class SignupService:
    """Runs the signup flow."""

    def __init__(
        self,
        session: AsyncSession,
        identity_provider: IdentityProvider,
        role_assignment: RoleAssignmentService,
        password_validator: PasswordValidator | None = None,
    ) -> None:
        self.session = session
        self.identity_provider = identity_provider
        self.role_assignment = role_assignment
        self.password_validator = password_validator or PasswordValidator()
        self.profiles = ProfileRepository(session)

    async def signup(
        self,
        email: str,
        password: str,
        display_name: str | None,
        access_code: str,
    ) -> SignupResult:
        """Create an account and give it the role of ``access_code``.

        Raises:
            ValidationFailedError: The password is too weak.
            IdentityAlreadyExistsError: The email belongs to someone else.
            InvalidAccessCodeError: The code matches no role.
            RoleAlreadyAssignedError: The account already has a role.
        """
        errors = self.password_validator.validate(password)
        if errors:
            raise ValidationFailedError("; ".join(error.message for error in errors))

        metadata = {"display_name": display_name} if display_name else {}
        try:
            user_id = await self.identity_provider.create_identity(email, password, metadata)
        except IdentityAlreadyExistsError:
            user_id = await self._resume(email, password)

        role = await self.role_assignment.assign_role_with_code(user_id, access_code)
        await self._sync_display_name(user_id, display_name)

        auth_session = await self.identity_provider.authenticate(email, password)
        logger.info("Signup completed", user_id=user_id, role=role.value)
        return SignupResult(role=role, session=auth_session)

    async def _resume(self, email: str, password: str) -> str:
        """Reuse an existing identity when the password proves ownership."""
        try:
            auth_session = await self.identity_provider.authenticate(email, password)
        except InvalidCredentialsError as e:
            raise IdentityAlreadyExistsError(email) from e
        logger.info("Signup resumed for existing identity", user_id=auth_session.user_id)
        return auth_session.user_id

    async def _sync_display_name(self, user_id: str, display_name: str | None) -> None:
        if not display_name:
            return
        profile = await self.profiles.get_by_user_id(user_id)
        if profile is not None and profile.display_name != display_name:
            await self.profiles.update_display_name(profile, display_name)
            await self.session.commit()
