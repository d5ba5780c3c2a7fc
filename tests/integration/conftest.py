"""PostgreSQL fixtures for SqlEntityStore tests.

Set TEST_DATABASE_URL (postgresql+asyncpg://...) to run them; otherwise
every requires_db test is skipped. Each test runs inside an outer
transaction that is rolled back, so the schema is created once and
rows never leak between tests.
"""

import os

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from app.infrastructure.persistence import models  # noqa: F401
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.store import SqlEntityStore

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")


@pytest.fixture
async def db_session():
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set")
    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with engine.connect() as conn:
        outer = await conn.begin()
        session = AsyncSession(
            bind=conn,
            expire_on_commit=False,
            join_transaction_mode="create_savepoint",
        )
        try:
            yield session
        finally:
            await session.close()
            await outer.rollback()
    await engine.dispose()


@pytest.fixture
def sql_store(db_session) -> SqlEntityStore:
    return SqlEntityStore(db_session)
