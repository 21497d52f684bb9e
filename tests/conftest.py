"""Pytest configuration for all tests."""

from dataclasses import dataclass
from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from guestgate.core.config import DEFAULT_ACCESS_CODES
from guestgate.domain.entities import AppRole, Caller
from guestgate.domain.services import PolicyGate
from guestgate.infrastructure.auth import hash_password, jwt_service
from guestgate.infrastructure.persistence.database import Base, enable_sqlite_foreign_keys
from guestgate.infrastructure.persistence.models import IdentityModel
from guestgate.infrastructure.persistence.repositories import (
    AccessCodeRepository,
    ProfileRepository,
    UserRoleRepository,
)

TEST_PASSWORD = "Password123"


@dataclass
class TestUser:
    """A user created directly in the database for a test."""

    __test__ = False

    id: str
    email: str
    role: AppRole | None

    @property
    def caller(self) -> Caller:
        return Caller(user_id=self.id, email=self.email)

    @property
    def headers(self) -> dict[str, str]:
        token = jwt_service.create_access_token(self.id, self.email)
        return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database seeded with the default access codes.
    Foreign keys are enforced, as they are in the application engine.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        await AccessCodeRepository(session).seed_defaults(DEFAULT_ACCESS_CODES)
        await session.commit()

    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from guestgate.infrastructure.api.app import app
    from guestgate.infrastructure.persistence.database import get_db_session

    async def override_get_db_session():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture
def create_identity(db_session: AsyncSession) -> Callable[[str, str], Awaitable[IdentityModel]]:
    """Factory creating a bare identity, without profile or role."""

    async def _create(user_id: str, email: str) -> IdentityModel:
        identity = IdentityModel(
            id=user_id,
            email=email,
            password_hash=hash_password(TEST_PASSWORD),
            is_active=True,
        )
        db_session.add(identity)
        await db_session.flush()
        return identity

    return _create


@pytest.fixture
def create_user(db_session: AsyncSession) -> Callable[..., Awaitable[TestUser]]:
    """Factory creating an identity, its profile and optionally a role row."""
    counter = {"n": 0}

    async def _create(role: AppRole | None = None, email: str | None = None) -> TestUser:
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        identity = IdentityModel(
            id=f"user-{counter['n']:04d}",
            email=email,
            password_hash=hash_password(TEST_PASSWORD),
            is_active=True,
        )
        db_session.add(identity)
        await db_session.flush()
        await ProfileRepository(db_session).create(identity.id, email, email.split("@")[0])
        if role is not None:
            await UserRoleRepository(db_session).insert(identity.id, role)
        await db_session.commit()
        return TestUser(id=identity.id, email=email, role=role)

    return _create


@pytest_asyncio.fixture
async def admin(create_user) -> TestUser:
    return await create_user(AppRole.ADMIN, "admin@example.com")


@pytest_asyncio.fixture
async def staff(create_user) -> TestUser:
    return await create_user(AppRole.STAFF, "staff@example.com")


@pytest_asyncio.fixture
async def reception(create_user) -> TestUser:
    return await create_user(AppRole.RECEPTION, "reception@example.com")


@pytest_asyncio.fixture
async def no_role(create_user) -> TestUser:
    return await create_user(None, "norole@example.com")


@pytest.fixture
def password() -> str:
    """Password of every user made by ``create_user``."""
    return TEST_PASSWORD


@pytest.fixture
def gate_for(db_session: AsyncSession) -> Callable[[TestUser | None], PolicyGate]:
    """Build a fresh policy gate for a user, or for the public channel with None."""

    def _gate(user: TestUser | None) -> PolicyGate:
        caller = user.caller if user is not None else Caller.public()
        return PolicyGate(db_session, caller)

    return _gate
