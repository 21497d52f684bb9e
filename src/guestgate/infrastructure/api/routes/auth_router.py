"""Authentication API routes.

Provides endpoints for signup with an access code, login and the current
user's role.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from guestgate.core.config import get_settings
from guestgate.core.logging import get_logger
from guestgate.domain.entities import AppRole
from guestgate.domain.exceptions import (
    InvalidAccessCodeError,
    RoleAlreadyAssignedError,
)
from guestgate.domain.services import RoleResolver, SignupService
from guestgate.infrastructure.api.dependencies import (
    AuthenticatedUser,
    DbSession,
    Identities,
    get_signup_service,
)
from guestgate.infrastructure.api.schemas import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    SignupRequest,
)
from guestgate.infrastructure.persistence.repositories import ProfileRepository

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        400: {"description": "Invalid access code, account already has a role, or weak password"},
        409: {"description": "Conflict - email already exists"},
        503: {"description": "Data store unavailable, safe to retry"},
    },
)
async def signup(
    request: SignupRequest,
    service: SignupService = Depends(get_signup_service),
) -> AuthResponse | JSONResponse:
    """Create an account and assign the role matching the access code.

    Signing up again with the same email and password after a failed role
    step retries only the role step.
    """
    try:
        result = await service.signup(
            email=request.email,
            password=request.password,
            display_name=request.display_name,
            access_code=request.access_code,
        )
    except InvalidAccessCodeError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": e.error, "message": e.message},
        )
    except RoleAlreadyAssignedError as e:
        if get_settings().signup_collapse_failures:
            collapsed = InvalidAccessCodeError()
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": collapsed.error, "message": collapsed.message},
            )
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.error, "message": e.message},
        )

    return AuthResponse(
        user_id=result.session.user_id,
        email=result.session.email,
        role=result.role.value,
        token=result.session.access_token,
        expires_in=result.session.expires_in,
    )


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    responses={401: {"description": "Invalid credentials"}},
)
async def login(
    request: LoginRequest,
    session: DbSession,
    identities: Identities,
) -> AuthResponse:
    """Authenticate and return an access token and the current role."""
    auth_session = await identities.authenticate(request.email, request.password)
    role = await RoleResolver(session).role_of(auth_session.user_id)

    logger.info("Login successful", user_id=auth_session.user_id)
    return AuthResponse(
        user_id=auth_session.user_id,
        email=auth_session.email,
        role=role.value if role is not None else None,
        token=auth_session.access_token,
        expires_in=auth_session.expires_in,
    )


@router.get("/me", response_model=MeResponse)
async def get_current_user_info(current_user: AuthenticatedUser, session: DbSession) -> MeResponse:
    """Get the current user, their role and capability flags."""
    role = await RoleResolver(session).role_of(current_user.user_id)
    profile = await ProfileRepository(session).get_by_user_id(current_user.user_id)

    return MeResponse(
        user_id=current_user.user_id,
        email=current_user.email,
        display_name=profile.display_name if profile is not None else None,
        role=role.value if role is not None else None,
        is_admin=role == AppRole.ADMIN,
        is_staff=role == AppRole.STAFF,
        is_reception=role == AppRole.RECEPTION,
    )
