"""Root conftest — shared test configuration and the API test client.

Invariants:
    - Environment defaults are set before routesaver.main is imported
    - Every test using `client` gets a fresh in-memory SQLite database
    - get_db is overridden and db_manager patched for the readiness check

Design Decisions:
    - SQLite in-memory: fast, no external dependency; JSON and Uuid columns
      behave the same as on PostgreSQL for what the services do
    - StaticPool: every session sees the same in-memory database
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import routesaver.infrastructure.database as db_module
import routesaver.models  # noqa: F401
from routesaver.db.base import Base
from routesaver.infrastructure.database import DatabaseSessionManager, get_db
from routesaver.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # readiness check reads db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """Register through the API; returns the response body."""
    async def _register(name="Ana", email="a@x.com", password="secret1") -> dict:
        res = await client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _register


@pytest.fixture
async def auth_headers(register_user) -> dict:
    body = await register_user()
    return bearer(body["token"])


@pytest.fixture
async def other_headers(register_user) -> dict:
    body = await register_user(name="Bia", email="b@x.com")
    return bearer(body["token"])