"""
Test infrastructure for the content API.

Strategy
--------
- SQLite in-memory via aiosqlite; StaticPool keeps every session on the
  one connection that holds the in-memory database.
- Both ``get_db`` and ``get_read_db`` are overridden, so the write model
  and the read model see the same test database.
- Tables are created before each test and dropped after it.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db, get_read_db
from app.dependencies import Resources
from app.main import app
from app.middleware import install_query_counter

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency overrides
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def override_get_read_db():
    async with async_session_test() as session:
        yield session


app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_read_db] = override_get_read_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for tests that drive models and validators directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def read_db_session() -> AsyncSession:
    """A second session standing in for the read replica."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def resources(db_session: AsyncSession) -> Resources:
    """Every model, validator and action bound to ``db_session``."""
    return Resources(db_session, db_session)


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def missing_id() -> str:
    """A well-formed identifier that is never assigned."""
    return "0" * 24
