"""Database engine, declarative base and session helpers."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import get_settings
from app.core.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Base class for all persisted shapes."""

    pass


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create every table registered on ``Base.metadata``."""
    async with (bind or engine).begin() as conn:
        logger.info("Creating database tables", tables=sorted(Base.metadata.tables))
        await conn.run_sync(Base.metadata.create_all)


async def close_db(bind: AsyncEngine | None = None) -> None:
    """Close database connections."""
    logger.info("Closing database connections")
    await (bind or engine).dispose()


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session that commits on success and rolls back on error."""
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
