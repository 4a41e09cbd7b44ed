"""Database Session Manager — verifies error mapping, rollback and health checks."""

import pytest
from sqlalchemy import text

from routesaver.core.errors import DatabaseError
from routesaver.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def manager():
    m = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await m.create_all()
    yield m
    await m.dispose()


async def test_health_check_ok(manager):
    assert await manager.health_check()


async def test_sqlalchemy_error_mapped_to_database_error(manager):
    with pytest.raises(DatabaseError) as exc:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
    assert exc.value.http_status == 503
    assert exc.value.operation == "execute"


async def test_other_exceptions_propagate_unchanged(manager):
    with pytest.raises(KeyError):
        async with manager.session():
            raise KeyError("boom")


async def test_tables_created(manager):
    async with manager.session() as db:
        result = await db.execute(text("SELECT count(*) FROM routes"))
        assert result.scalar_one() == 0
