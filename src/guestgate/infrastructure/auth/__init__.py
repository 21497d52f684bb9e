"""Authentication infrastructure: password hashing, JWT and the identity provider."""

from guestgate.infrastructure.auth.identity_provider import (
    AuthSession,
    IdentityProvider,
    IdentityProviderError,
    LocalIdentityProvider,
)
from guestgate.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
    jwt_service,
)
from guestgate.infrastructure.auth.password_hasher import (
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "AuthSession",
    "IdentityProvider",
    "IdentityProviderError",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "LocalIdentityProvider",
    "TokenExpiredError",
    "hash_password",
    "jwt_service",
    "needs_rehash",
    "verify_password",
]
