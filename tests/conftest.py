"""
Test infrastructure for the Market & Board API.

Strategy
--------
- SQLite in-memory via aiosqlite, so no Postgres is needed in CI.
- StaticPool makes every session share the one in-memory connection;
  a second connection would see an empty database.
- The engine comes from app.database.make_engine, which switches SQLite
  foreign keys on so deleting a parent cascades to its comments the way
  Postgres does.
- The app's get_db dependency is overridden to use the test sessions.
- Tables are created before and dropped after every test.
- The Redis client is left unset; the cache then misses every read and
  skips every write, so tests always exercise the database path.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from app.cache import cache
from app.database import Base, get_db, make_engine, make_session_factory, session_scope
from app.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = make_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

async_session_test = make_session_factory(engine_test)


async def override_get_db():
    async with session_scope(async_session_test) as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def test_engine():
    return engine_test


@pytest.fixture
def session_factory():
    return async_session_test


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for service-level tests (flushes, never commits)."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    cache._redis = None
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
