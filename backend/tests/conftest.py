"""Shared fixtures: an in-memory SQLite database per test."""

import os

# Must be set before app modules build the global engine.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app import models  # noqa: E402, F401
from app.core.database import close_db, init_db  # noqa: E402


@pytest_asyncio.fixture
async def test_engine():
    """Fresh engine with all tables; one shared connection so :memory: survives."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_db(engine)
    yield engine
    await close_db(engine)


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def test_session(session_factory):
    async with session_factory() as session:
        yield session
