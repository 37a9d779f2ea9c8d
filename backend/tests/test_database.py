"""Tests for session scope helpers and the start-up entry point."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import inspect, select

from app import main as app_main
from app.core import database
from app.models import User


@pytest.fixture
def bound_session_local(monkeypatch, session_factory):
    """Point get_db_session at the per-test engine."""
    monkeypatch.setattr(database, "AsyncSessionLocal", session_factory)
    return session_factory


@pytest.mark.asyncio
async def test_init_db_creates_tables(test_engine) -> None:
    async with test_engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert {"users", "journey_maps"} <= set(tables)


@pytest.mark.asyncio
async def test_session_scope_commits(bound_session_local) -> None:
    async with database.get_db_session() as session:
        session.add(User(username="committed", password="x"))

    async with bound_session_local() as session:
        result = await session.execute(select(User).where(User.username == "committed"))
        assert result.scalar_one_or_none() is not None


@pytest.mark.asyncio
async def test_session_scope_rolls_back(bound_session_local) -> None:
    with pytest.raises(RuntimeError, match="boom"):
        async with database.get_db_session() as session:
            session.add(User(username="rolled-back", password="x"))
            await session.flush()
            raise RuntimeError("boom")

    async with bound_session_local() as session:
        result = await session.execute(select(User).where(User.username == "rolled-back"))
        assert result.scalar_one_or_none() is None


@pytest.mark.asyncio
async def test_main_initialises_and_closes(monkeypatch) -> None:
    init_db = AsyncMock()
    close_db = AsyncMock()
    configure_logging = MagicMock()
    monkeypatch.setattr(app_main, "init_db", init_db)
    monkeypatch.setattr(app_main, "close_db", close_db)
    monkeypatch.setattr(app_main, "configure_logging", configure_logging)

    await app_main.main()

    configure_logging.assert_called_once()
    init_db.assert_awaited_once()
    close_db.assert_awaited_once()


@pytest.mark.asyncio
async def test_main_closes_on_failure(monkeypatch) -> None:
    close_db = AsyncMock()
    monkeypatch.setattr(app_main, "init_db", AsyncMock(side_effect=OSError("disk full")))
    monkeypatch.setattr(app_main, "close_db", close_db)
    monkeypatch.setattr(app_main, "configure_logging", MagicMock())

    with pytest.raises(OSError):
        await app_main.main()
    close_db.assert_awaited_once()
