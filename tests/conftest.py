from typing import AsyncGenerator, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from book_reviews.db.session import Database, get_session
from book_reviews.main import create_application
from book_reviews.services.cache_service import CacheService
from tests.mocks.broken_session import BrokenSession
from tests.mocks.fake_redis import FailingRedis, FakeRedis

# --- Test Database Setup ---
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# --- Pytest Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def database() -> AsyncGenerator[Database, None]:
    """
    A fresh in-memory database with all tables created, per test.
    """
    db = Database(TEST_DATABASE_URL)
    await db.connect()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture(scope="function")
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async for session in database.session():
        yield session


@pytest.fixture
def events() -> List[str]:
    """Shared log of store operations, for ordering assertions."""
    return []


@pytest.fixture
def fake_redis(events: List[str]) -> FakeRedis:
    return FakeRedis(events=events)


@pytest.fixture
def failing_redis() -> FailingRedis:
    return FailingRedis()


@pytest.fixture
def cache_service(fake_redis: FakeRedis) -> CacheService:
    return CacheService(fake_redis, ttl=3600, operation_timeout=0.5, enabled=True)


async def _client_for(
    database: Database, redis_client, dependency_overrides: Optional[dict] = None
) -> AsyncGenerator[AsyncClient, None]:
    app = create_application(database=database, redis_client=redis_client)
    app.dependency_overrides.update(dependency_overrides or {})
    async with app.router.lifespan_context(app):
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://testserver"
        ) as client:
            yield client


@pytest_asyncio.fixture(scope="function")
async def test_client(fake_redis: FakeRedis) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for an app backed by an in-memory database and FakeRedis.
    """
    async for client in _client_for(Database(TEST_DATABASE_URL), fake_redis):
        yield client


@pytest_asyncio.fixture(scope="function")
async def failing_cache_client(
    failing_redis: FailingRedis,
) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for an app whose cache fails on every call.
    """
    async for client in _client_for(Database(TEST_DATABASE_URL), failing_redis):
        yield client


@pytest_asyncio.fixture(scope="function")
async def broken_db_client(fake_redis: FakeRedis) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for an app whose database sessions fail on every statement.
    """

    async def override_get_session():
        yield BrokenSession()

    async for client in _client_for(
        Database(TEST_DATABASE_URL),
        fake_redis,
        dependency_overrides={get_session: override_get_session},
    ):
        yield client
