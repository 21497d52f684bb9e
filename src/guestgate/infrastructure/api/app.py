"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

from guestgate.core.config import get_settings
from guestgate.core.hooks import HookEvent, HookRegistry
from guestgate.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from guestgate.domain.entities import HookContext
from guestgate.domain.exceptions import GuestGateError, StoreUnavailableError
from guestgate.infrastructure.auth import IdentityProviderError
from guestgate.infrastructure.hooks import register_builtin_hooks
from guestgate.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging, prepares the database (tables in development, access
    code seed, bootstrap admin) and fires the lifecycle hooks.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting GuestGate",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    lifecycle_data = {"app_name": settings.app_name, "version": settings.app_version}
    await app.state.hook_registry.trigger(HookEvent.ON_BOOTSTRAP, lifecycle_data, HookContext())
    await app.state.hook_registry.trigger(HookEvent.ON_SERVE, lifecycle_data, HookContext())
    logger.info("Lifecycle hooks triggered", events=["on_bootstrap", "on_serve"])

    yield

    logger.info("Shutting down GuestGate")
    await app.state.hook_registry.trigger(HookEvent.ON_TERMINATE, lifecycle_data, HookContext())

    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Event check-in with access-code roles",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Built-in hooks are registered here rather than in the lifespan so the
    # profile hook is present even when the app runs without lifespan events
    hook_registry = HookRegistry()
    register_builtin_hooks(hook_registry)
    app.state.hook_registry = hook_registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints."""

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check. Does not touch the database."""
        return {
            "status": "healthy",
            "service": "GuestGate",
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check including database connectivity."""
        if await get_db_manager().check_connection():
            return {
                "status": "ready",
                "service": "GuestGate",
                "version": get_settings().app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": "GuestGate",
                "database": "disconnected",
            },
        )

    @app.get("/live", tags=["health"])
    async def liveness_check():
        return {
            "status": "alive",
            "service": "GuestGate",
            "version": get_settings().app_version,
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes."""
    from guestgate.infrastructure.api.routes import (
        access_codes_router,
        auth_router,
        event_staff_router,
        events_router,
        guests_router,
        public_router,
        users_router,
    )

    settings = get_settings()
    prefix = settings.api_prefix

    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(access_codes_router, prefix=f"{prefix}/access-codes", tags=["access-codes"])
    app.include_router(users_router, prefix=f"{prefix}/users", tags=["users"])
    app.include_router(events_router, prefix=f"{prefix}/events", tags=["events"])
    app.include_router(guests_router, prefix=f"{prefix}/events", tags=["guests"])
    app.include_router(event_staff_router, prefix=f"{prefix}/events", tags=["event-staff"])
    app.include_router(public_router, prefix=f"{prefix}/public", tags=["public"])

    @app.get(prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
        }


def _error_response(exc: GuestGateError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(GuestGateError)
    async def domain_exception_handler(request: Request, exc: GuestGateError):
        """Map domain errors to their status code and a user-safe message."""
        if exc.status_code >= 500:
            logger.error("Request failed", path=str(request.url.path), error=type(exc).__name__)
        return _error_response(exc)

    @app.exception_handler(OperationalError)
    @app.exception_handler(InterfaceError)
    async def store_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Data store unavailable",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
        )
        return _error_response(StoreUnavailableError())

    @app.exception_handler(IdentityProviderError)
    async def identity_provider_exception_handler(request: Request, exc: IdentityProviderError):
        logger.error("Identity provider failed", path=str(request.url.path), error=str(exc))
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "message": "Could not create the account."},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if get_settings().debug else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware."""

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and bind its correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info("Request started", method=request.method, path=str(request.url.path))
        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
