"""Shared test configuration and fixtures.

Every test gets a fresh schema on its own engine, and a session wrapped in a
transaction that rolls back afterwards. SQLite in memory is used unless
``TEST_DATABASE_URL`` points somewhere else.
"""

import os
import uuid
from collections.abc import AsyncGenerator
from datetime import date

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from alloggiati.auth.context import UserContext
from alloggiati.auth.credentials import hash_password
from alloggiati.auth.jwt import create_token_pair
from alloggiati.database import Base, get_db
from alloggiati.main import app
from alloggiati.models.booking import BOOKING_ACTIVE, Booking
from alloggiati.models.profile import ROLE_ADMIN, ROLE_USER, Profile

_test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _make_engine() -> AsyncEngine:
    if _test_db_url.startswith("sqlite"):
        # One shared connection so the in-memory database survives between checkouts.
        return create_async_engine(
            _test_db_url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(_test_db_url, echo=False, pool_pre_ping=True)


# ---------------------------------------------------------------------------
# Engine and schema
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = _make_engine()
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def setup_test_db(test_engine: AsyncEngine) -> AsyncGenerator[None, None]:
    """Create all tables before the test and drop them afterwards."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ---------------------------------------------------------------------------
# Per-test: transactional rollback for isolation
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine, setup_test_db) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def create_profile(
    db_session: AsyncSession,
    *,
    role: str = ROLE_USER,
    full_name: str = "Test User",
    is_active: bool = True,
) -> Profile:
    """Insert a profile directly in the DB."""
    unique = uuid.uuid4().hex[:8]
    profile = Profile(
        email=f"{role}-{unique}@test.com",
        hashed_password=hash_password("testpass123"),
        full_name=full_name,
        role=role,
        is_active=is_active,
    )
    db_session.add(profile)
    await db_session.flush()
    await db_session.refresh(profile)
    return profile


async def create_booking(
    db_session: AsyncSession,
    *,
    room_number: str = "101",
    check_in: date = date(2024, 6, 1),
    check_out: date = date(2024, 6, 4),
    status: str = BOOKING_ACTIVE,
    guest_name: str = "Mario Rossi",
    code: str | None = None,
) -> Booking:
    """Insert a booking directly in the DB (bookings are created externally)."""
    booking = Booking(
        code=code or f"BK-{uuid.uuid4().hex[:6].upper()}",
        guest_name=guest_name,
        room_number=room_number,
        check_in_date=check_in,
        check_out_date=check_out,
        status=status,
    )
    db_session.add(booking)
    await db_session.flush()
    await db_session.refresh(booking)
    return booking


def headers_for(profile: Profile) -> dict[str, str]:
    tokens = create_token_pair(str(profile.id), profile.role)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


# ---------------------------------------------------------------------------
# Convenience fixtures: users, contexts, bookings
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> Profile:
    return await create_profile(db_session, full_name="Front Desk")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> Profile:
    return await create_profile(db_session, full_name="Night Shift")


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> Profile:
    return await create_profile(db_session, role=ROLE_ADMIN, full_name="Giulia Admin")


@pytest_asyncio.fixture
async def auth_headers(test_user: Profile) -> dict[str, str]:
    return headers_for(test_user)


@pytest_asyncio.fixture
async def other_headers(other_user: Profile) -> dict[str, str]:
    return headers_for(other_user)


@pytest_asyncio.fixture
async def admin_headers(admin_user: Profile) -> dict[str, str]:
    return headers_for(admin_user)


@pytest_asyncio.fixture
async def user_ctx(test_user: Profile) -> UserContext:
    return UserContext.from_profile(test_user)


@pytest_asyncio.fixture
async def other_ctx(other_user: Profile) -> UserContext:
    return UserContext.from_profile(other_user)


@pytest_asyncio.fixture
async def admin_ctx(admin_user: Profile) -> UserContext:
    return UserContext.from_profile(admin_user)


@pytest_asyncio.fixture
async def test_booking(db_session: AsyncSession) -> Booking:
    """Room 101, checking in 2024-06-01."""
    return await create_booking(db_session, code="BK-1")


@pytest_asyncio.fixture
async def make_booking(db_session: AsyncSession):
    """Factory fixture: ``await make_booking(room_number="102", ...)``."""

    async def _make(**kwargs) -> Booking:
        return await create_booking(db_session, **kwargs)

    return _make


@pytest_asyncio.fixture
async def make_profile(db_session: AsyncSession):
    """Factory fixture: ``await make_profile(role="admin", full_name=...)``."""

    async def _make(**kwargs) -> Profile:
        return await create_profile(db_session, **kwargs)

    return _make
