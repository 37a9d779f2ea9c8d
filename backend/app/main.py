"""Application entry point: ``python -m app.main`` creates the schema."""

import asyncio

from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.core.config import get_settings
from app.core.database import close_db, init_db
from app.core.logging import configure_logging, get_logger

settings = get_settings()
logger = get_logger(__name__)


async def main() -> None:
    configure_logging(debug=settings.DEBUG, level=settings.LOG_LEVEL)
    logger.info(
        "Starting JourneyMap",
        version=settings.APP_VERSION,
        env=settings.ENV,
        debug=settings.DEBUG,
    )
    try:
        await init_db()
    finally:
        logger.info("Shutting down JourneyMap")
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
