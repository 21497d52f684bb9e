"""FastAPI dependencies for authentication and authorization.

Turns the Authorization header into a ``Caller`` and builds the per-request
``PolicyGate`` and services on top of it. The token only proves identity;
the role is looked up on every request so a revoked role stops working at
once.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from guestgate.core.config import get_settings
from guestgate.core.hooks import HookRegistry
from guestgate.core.logging import get_logger
from guestgate.domain.entities import Caller
from guestgate.domain.services import (
    AccessCodeService,
    ActivityLogService,
    EventService,
    EventStaffService,
    GuestService,
    PasswordValidator,
    PolicyGate,
    RoleAssignmentService,
    SignupService,
    UserAdminService,
)
from guestgate.infrastructure.auth import (
    IdentityProvider,
    InvalidTokenError,
    LocalIdentityProvider,
    TokenExpiredError,
    jwt_service,
)
from guestgate.infrastructure.persistence.database import get_db_session
from guestgate.infrastructure.persistence.repositories import IdentityRepository

logger = get_logger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    session: Annotated[AsyncSession, Depends(get_db_session)] = None,
) -> Caller:
    """Extract and validate the current user from the Authorization header.

    Args:
        authorization: The Authorization header value (e.g., "Bearer <token>").
        session: Database session used to check the identity still exists.

    Returns:
        Caller: The authenticated caller.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired, or the
            identity was removed or disabled.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise _unauthorized("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise _unauthorized("Could not validate credentials")

    try:
        payload = jwt_service.validate_access_token(parts[1])
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise _unauthorized("Token has expired")
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise _unauthorized(f"Invalid token: {str(e)}")

    identity = await IdentityRepository(session).get_by_id(payload["sub"])
    if identity is None or not identity.is_active:
        logger.info("Authentication failed: identity gone", user_id=payload["sub"])
        raise _unauthorized("Could not validate credentials")

    return Caller(user_id=identity.id, email=identity.email)


def get_public_caller() -> Caller:
    """Caller of the public display and self check-in screens."""
    return Caller.public()


def get_hook_registry(request: Request) -> HookRegistry:
    """Get the hook registry from app state."""
    return request.app.state.hook_registry


# Type aliases for dependency injection
AuthenticatedUser = Annotated[Caller, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Hooks = Annotated[HookRegistry, Depends(get_hook_registry)]


def get_policy_gate(caller: AuthenticatedUser, session: DbSession) -> PolicyGate:
    return PolicyGate(session, caller)


def get_public_gate(
    caller: Annotated[Caller, Depends(get_public_caller)],
    session: DbSession,
) -> PolicyGate:
    return PolicyGate(session, caller)


Gate = Annotated[PolicyGate, Depends(get_policy_gate)]
PublicGate = Annotated[PolicyGate, Depends(get_public_gate)]


def get_identity_provider(session: DbSession, hooks: Hooks) -> IdentityProvider:
    return LocalIdentityProvider(session, hooks)


Identities = Annotated[IdentityProvider, Depends(get_identity_provider)]


def get_signup_service(session: DbSession, hooks: Hooks, identities: Identities) -> SignupService:
    settings = get_settings()
    return SignupService(
        session,
        identities,
        RoleAssignmentService(session, hooks),
        PasswordValidator(min_length=settings.password_min_length),
    )


def get_access_code_service(session: DbSession, gate: Gate, hooks: Hooks) -> AccessCodeService:
    return AccessCodeService(session, gate, hooks)


def get_user_admin_service(
    session: DbSession, gate: Gate, identities: Identities, hooks: Hooks
) -> UserAdminService:
    return UserAdminService(
        session,
        gate,
        identities,
        hooks,
        PasswordValidator(min_length=get_settings().password_min_length),
    )


def get_event_service(session: DbSession, gate: Gate) -> EventService:
    return EventService(session, gate)


def get_guest_service(session: DbSession, gate: Gate, hooks: Hooks) -> GuestService:
    return GuestService(session, gate, hooks)


def get_event_staff_service(session: DbSession, gate: Gate) -> EventStaffService:
    return EventStaffService(session, gate)


def get_activity_log_service(session: DbSession, gate: Gate) -> ActivityLogService:
    return ActivityLogService(session, gate)


def get_public_event_service(session: DbSession, gate: PublicGate) -> EventService:
    return EventService(session, gate)


def get_public_guest_service(session: DbSession, gate: PublicGate, hooks: Hooks) -> GuestService:
    return GuestService(session, gate, hooks)
