"""Identity provider abstraction and the local implementation.

The rest of the system only relies on ``IdentityProvider``: it creates
identities, authenticates them, resets passwords and disables them.
Identities are never deleted: events, guests and logs stay attached to
their creator. ``LocalIdentityProvider``
keeps Argon2id hashes in the ``identities`` table and issues JWT access
tokens.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.core.hooks import HookEvent, HookRegistry
from guestgate.core.logging import get_logger
from guestgate.domain.entities import HookContext
from guestgate.domain.exceptions import (
    IdentityAlreadyExistsError,
    InvalidCredentialsError,
)
from guestgate.infrastructure.auth.jwt_service import JWTService, jwt_service
from guestgate.infrastructure.auth.password_hasher import (
    hash_password,
    needs_rehash,
    verify_password,
)
from guestgate.infrastructure.persistence.models import IdentityModel
from guestgate.infrastructure.persistence.repositories import IdentityRepository

logger = get_logger(__name__)


class IdentityProviderError(Exception):
    """Raised when the identity provider cannot complete an operation."""


@dataclass(frozen=True)
class AuthSession:
    """Result of a successful authentication."""

    user_id: str
    email: str
    access_token: str
    expires_in: int
    token_type: str = "Bearer"


class IdentityProvider(ABC):
    """Abstract identity provider."""

    @abstractmethod
    async def create_identity(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Create an identity and return its ID."""
        ...

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> AuthSession:
        """Check credentials and open a session."""
        ...

    @abstractmethod
    async def set_password(self, user_id: str, password: str) -> bool:
        """Replace the password of an identity. Returns False if it does not exist."""
        ...

    @abstractmethod
    async def disable_identity(self, user_id: str) -> bool:
        """Stop an identity from logging in. Returns False if it does not exist."""
        ...


class LocalIdentityProvider(IdentityProvider):
    """Identity provider backed by the ``identities`` table.

    After an identity is flushed, ``on_auth_after_register`` runs in the same
    session; the built-in hook creates the profile there, so identity and
    profile are committed together.
    """

    def __init__(
        self,
        session: AsyncSession,
        hook_registry: HookRegistry,
        tokens: JWTService = jwt_service,
    ) -> None:
        self.session = session
        self.hook_registry = hook_registry
        self.tokens = tokens
        self.identities = IdentityRepository(session)

    async def create_identity(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Create an identity and its profile.

        Args:
            email: Login email, stored lowercased.
            password: Plaintext password, stored as an Argon2id hash.
            metadata: Extra signup data handed to the after-register hooks,
                e.g. ``{"display_name": "Ana"}``.

        Returns:
            The new identity ID.

        Raises:
            IdentityAlreadyExistsError: If the email is taken.
            IdentityProviderError: If an after-register hook failed.
        """
        email = email.strip().lower()
        if await self.identities.get_by_email(email) is not None:
            raise IdentityAlreadyExistsError(email)

        identity = IdentityModel(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=hash_password(password),
            is_active=True,
        )
        try:
            await self.identities.create(identity)
        except IntegrityError as e:
            # Lost a race against a signup with the same email
            await self.session.rollback()
            raise IdentityAlreadyExistsError(email) from e

        result = await self.hook_registry.trigger(
            HookEvent.ON_AUTH_AFTER_REGISTER,
            data={"user_id": identity.id, "email": email, **(metadata or {})},
            context=HookContext(user_id=identity.id, session=self.session),
        )
        if not result.success:
            await self.session.rollback()
            logger.error("Identity creation aborted by hook", email=email, errors=result.errors)
            raise IdentityProviderError(result.abort_message or "Identity creation failed")

        await self.session.commit()
        logger.info("Identity created", user_id=identity.id, email=email)
        return identity.id

    async def authenticate(self, email: str, password: str) -> AuthSession:
        """Verify credentials and issue an access token.

        Raises:
            InvalidCredentialsError: If the email is unknown, the password is
                wrong or the identity is inactive.
        """
        identity = await self.identities.get_by_email(email.strip())
        if identity is None or not identity.is_active:
            raise InvalidCredentialsError()
        if not verify_password(password, identity.password_hash):
            logger.info("Login failed: wrong password", user_id=identity.id)
            raise InvalidCredentialsError()

        if needs_rehash(identity.password_hash):
            identity.password_hash = hash_password(password)
        await self.identities.update_last_login(identity.id)
        await self.session.commit()

        return AuthSession(
            user_id=identity.id,
            email=identity.email,
            access_token=self.tokens.create_access_token(identity.id, identity.email),
            expires_in=self.tokens.get_expires_in(),
        )

    async def set_password(self, user_id: str, password: str) -> bool:
        """Store a new Argon2id hash. The caller commits."""
        updated = await self.identities.update_password(user_id, hash_password(password))
        if updated:
            logger.info("Password reset", user_id=user_id)
        return updated

    async def disable_identity(self, user_id: str) -> bool:
        """Deactivate an identity and mark its role as revoked. The caller commits."""
        disabled = await self.identities.deactivate(user_id)
        if disabled:
            await self.identities.mark_role_revoked(user_id)
            logger.info("Identity disabled", user_id=user_id)
        return disabled
