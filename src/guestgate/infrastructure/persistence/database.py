"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine configuration
for SQLAlchemy with async support. It supports both SQLite (aiosqlite) and
PostgreSQL (asyncpg) drivers.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event, select, text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from guestgate.core.config import get_settings
from guestgate.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on foreign key enforcement for a fresh SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """Database connection and session manager.

    This class manages the async database engine and session factory.
    It provides context managers for database sessions and handles
    connection pooling.
    """

    def __init__(self) -> None:
        """Initialize the database manager."""
        self.settings = get_settings()
        self._engine = None
        self._session_factory = None

    @property
    def is_sqlite(self) -> bool:
        return self.settings.database_url.startswith("sqlite")

    @property
    def engine(self):
        """Get or create the database engine.

        Returns:
            AsyncEngine: SQLAlchemy async engine instance.
        """
        if self._engine is None:
            self._engine = create_async_engine(
                self.settings.database_url,
                echo=self.settings.db_echo,
                pool_size=self.settings.db_pool_size,
                max_overflow=self.settings.db_max_overflow,
                pool_timeout=self.settings.db_pool_timeout,
                pool_recycle=self.settings.db_pool_recycle,
                # SQLite-specific settings
                connect_args={
                    "check_same_thread": False,
                }
                if self.is_sqlite
                else {},
            )
            if self.is_sqlite and self.settings.db_sqlite_foreign_keys:
                event.listen(self._engine.sync_engine, "connect", enable_sqlite_foreign_keys)

            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
                pool_size=self.settings.db_pool_size,
            )
        return self._engine

    @property
    def session_factory(self):
        """Get or create the session factory.

        Returns:
            async_sessionmaker: SQLAlchemy async session factory.
        """
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all database tables.

        Used on startup in development. Production deployments run the
        Alembic migrations instead.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop all database tables.

        WARNING: This will delete all data. Only use in testing!
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.warning("Database tables dropped")

    async def disconnect(self) -> None:
        """Close the database engine and all connections."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope for database operations.

        Yields:
            AsyncSession: SQLAlchemy async session.

        Example:
            async with db.session() as session:
                result = await session.execute(select(GuestModel))
                guests = result.scalars().all()
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                logger.debug("Database connection check successful")
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


# Global database manager instance
_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to get database session.

    Yields:
        AsyncSession: SQLAlchemy async session, one per request.
    """
    db = get_db_manager()
    async with db.session() as session:
        yield session


async def init_database() -> None:
    """Initialize the database.

    Creates tables in development mode, seeds one access code per role and
    grants the bootstrap admin role when configured. In production the
    schema and the seed come from the Alembic migrations, but the seed is
    still re-checked here so a missing row is restored.
    """
    # Models must be imported so they are registered with Base.metadata
    from guestgate.infrastructure.persistence.models import (  # noqa: F401
        AccessCodeModel,
        ActivityLogModel,
        EventModel,
        GuestModel,
        IdentityModel,
        ProfileModel,
        UserRoleModel,
    )

    db = get_db_manager()
    settings = get_settings()

    if settings.database_url.startswith("sqlite"):
        # Extract path from sqlite+aiosqlite:///path/to/file.db
        db_path = settings.database_url.split(":///")[-1]
        db_dir = Path(db_path).parent
        db_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Database directory created", path=str(db_dir))

    if not await db.check_connection():
        logger.error("Database connection failed")
        raise RuntimeError("Failed to connect to database")

    if settings.is_development:
        logger.info("Development mode: Creating database tables")
        await db.create_tables()
    else:
        logger.info("Production mode: Skipping auto-create, use migrations")

    await seed_access_codes(db)
    await _grant_bootstrap_admins(db)


async def seed_access_codes(db: DatabaseManager) -> int:
    """Insert the default access code of every role that has no row yet.

    Returns:
        Number of rows inserted.
    """
    from guestgate.infrastructure.persistence.repositories import AccessCodeRepository

    settings = get_settings()
    async with db.session() as session:
        repo = AccessCodeRepository(session)
        created = await repo.seed_defaults(settings.default_access_codes)
        await session.commit()

    for role in created:
        logger.info("Seeded default access code", role=role)
    return len(created)


async def _grant_bootstrap_admins(db: DatabaseManager) -> None:
    """Grant the admin role to configured identities while no admin exists.

    Identities that already hold a role are left untouched, and nothing is
    granted once an admin is present.
    """
    from guestgate.domain.exceptions import BootstrapAlreadyDoneError, RoleAlreadyAssignedError
    from guestgate.domain.services import RoleAssignmentService
    from guestgate.infrastructure.persistence.models import IdentityModel

    settings = get_settings()
    if not settings.bootstrap_admin_emails:
        logger.debug("Bootstrap admin emails not configured, skipping")
        return

    async with db.session() as session:
        service = RoleAssignmentService(session)
        for email in settings.bootstrap_admin_emails:
            result = await session.execute(
                select(IdentityModel).where(IdentityModel.email == email.lower())
            )
            identity = result.scalar_one_or_none()
            if identity is None:
                logger.warning("Bootstrap admin identity not found", email=email)
                continue
            try:
                await service.grant_initial_admin(identity.id)
            except BootstrapAlreadyDoneError:
                logger.info("Admin already exists, skipping bootstrap grant", email=email)
                return
            except RoleAlreadyAssignedError:
                logger.warning("Bootstrap identity already holds a role", email=email)
                continue
            logger.info("Bootstrap admin granted", email=email, user_id=identity.id)


async def close_database() -> None:
    """Close the database connection on application shutdown."""
    db = get_db_manager()
    await db.disconnect()
