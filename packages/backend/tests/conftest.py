"""Test fixtures — a fresh in-memory database and app per test.

Learn: Each test gets its own SQLite engine (aiosqlite + StaticPool, so
every connection sees the same in-memory DB), tables created from the
models, and an app built from test settings: a known JWT secret, the
Polka key, the dev platform, and bcrypt cost 4 so hashing is fast.

The app's get_db is overridden to hand out the test session, so tests
can look at the rows the API wrote.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from chirpy.config import Settings
from chirpy.db.engine import get_db
from chirpy.db.models import Base
from chirpy.main import create_app

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"
TEST_JWT_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
TEST_POLKA_KEY = "f271c81ff7084ee5b99a5091b42d486e"


class FixedClock:
    """A clock that only moves when told to."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture()
def clock():
    return FixedClock()


@pytest.fixture()
def settings():
    return Settings(
        environment="development",
        database_url=TEST_DB_URL,
        jwt_secret=TEST_JWT_SECRET,
        polka_key=TEST_POLKA_KEY,
        platform="dev",
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(engine):
    session = AsyncSession(engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture()
def make_client(db_session):
    """Build an HTTP client for an app with the given settings."""

    def _make(app_settings: Settings) -> AsyncClient:
        app = create_app(app_settings)

        async def override_get_db():
            yield db_session

        app.dependency_overrides[get_db] = override_get_db
        transport = ASGITransport(app=app)
        return AsyncClient(transport=transport, base_url="http://test")

    return _make


@pytest_asyncio.fixture()
async def client(make_client, settings):
    async with make_client(settings) as ac:
        yield ac


async def signup(client: AsyncClient, email: str, password: str = "correct horse") -> dict:
    """Register and log in. Returns the login response body."""
    r = await client.post("/api/users", json={"email": email, "password": password})
    assert r.status_code == 201, r.text
    r = await client.post("/api/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
