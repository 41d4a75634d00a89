"""Root conftest — shared test configuration and in-memory SQLite database.

Invariants:
    - Every test that asks for `test_engine` gets a fresh in-memory database
      with the full schema, including the self-opinion triggers
    - Foreign keys are enforced (build_engine turns them on for SQLite)
"""

import os

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from what_writers_like.db.base import Base  # noqa: E402
from what_writers_like.infrastructure.database import (  # noqa: E402
    build_engine, create_schema,
)


@pytest.fixture
async def test_engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await create_schema(engine)
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
