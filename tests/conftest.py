"""
Pytest fixtures for ComicHub tests.

Tests run against a temporary SQLite file so the app's own engine, the
fixtures and every request session share one database.
"""

import os
import tempfile
import uuid
from typing import AsyncGenerator

# Configure the environment before any comichub module reads settings
_tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
_tmp.close()
TEST_DB_PATH = _tmp.name
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only-0123456789"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from comichub.config import get_settings

get_settings.cache_clear()

from comichub.database import async_session_maker, engine
from comichub.kernel.identity.jwt import TokenManager
from comichub.kernel.models import Base, Profile, Recommendation, Review, UserRole
from comichub.kernel.models.base import enum_value

from tests.factories import make_profile, make_recommendation


def pytest_sessionfinish(session, exitstatus):
    """Remove the temp database file after the run."""
    for path in (TEST_DB_PATH, f"{TEST_DB_PATH}-wal", f"{TEST_DB_PATH}-shm"):
        if os.path.exists(path):
            os.unlink(path)


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Fresh schema per test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """A session for arranging and inspecting state directly."""
    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def member(db_session: AsyncSession) -> Profile:
    return await make_profile(db_session, "reader")


@pytest_asyncio.fixture
async def other_member(db_session: AsyncSession) -> Profile:
    return await make_profile(db_session, "lurker")


@pytest_asyncio.fixture
async def moderator(db_session: AsyncSession) -> Profile:
    return await make_profile(db_session, "mod_mika", role=UserRole.MODERATOR)


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession) -> Profile:
    return await make_profile(db_session, "admin_ash", role=UserRole.ADMIN)


@pytest_asyncio.fixture
async def pending_recommendation(db_session: AsyncSession, member: Profile) -> Recommendation:
    return await make_recommendation(db_session, member)


@pytest_asyncio.fixture
async def approved_recommendation(db_session: AsyncSession, member: Profile) -> Recommendation:
    return await make_recommendation(db_session, member, title="Blue Period", is_approved=True)


@pytest_asyncio.fixture
async def review(
    db_session: AsyncSession,
    other_member: Profile,
    approved_recommendation: Recommendation,
) -> Review:
    item = Review(
        id=uuid.uuid4(),
        user_id=other_member.id,
        recommendation_id=approved_recommendation.id,
        content="Gorgeous art, slow start but worth it.",
        rating=4,
    )
    db_session.add(item)
    approved_recommendation.review_count = 1
    await db_session.commit()
    return item


@pytest.fixture
def token_manager() -> TokenManager:
    return TokenManager(
        secret_key="test-secret-key-for-testing-only-0123456789",
        algorithm="HS256",
        access_token_expire_minutes=30,
    )


@pytest.fixture
def auth_headers(token_manager: TokenManager):
    """Build Authorization headers for a profile."""

    def _headers(profile: Profile) -> dict:
        token, _ = token_manager.create_access_token(
            user_id=profile.id,
            username=profile.username,
            role=enum_value(profile.role),
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """In-process HTTP client against the app, sharing the test database."""
    from comichub.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
