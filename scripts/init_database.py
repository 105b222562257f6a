#!/usr/bin/env python3
"""Initialize database tables and seed reference data."""

import asyncio
import sys

from loguru import logger

from investnet.config.business_constants import DEFAULT_COMMISSION_RATES
from investnet.config.database import create_engine, create_session_maker
from investnet.config.settings import settings
from investnet.models import Base
from investnet.repositories.commission_repository import CommissionRateRepository
from investnet.repositories.withdrawal_repository import WithdrawalSettingsRepository

# Configure logger for script
logger.remove()
logger.add(sys.stderr, level="INFO")


async def init_database(database_url: str | None = None) -> None:
    """Create all tables, then seed commission rates and withdrawal settings."""
    engine = create_engine(database_url or settings.database_url, echo=False)

    async with engine.begin() as conn:
        logger.info("Creating tables (checkfirst=True)...")
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)

    session_maker = create_session_maker(engine)
    async with session_maker() as session:
        inserted = await CommissionRateRepository(session).seed_defaults(
            DEFAULT_COMMISSION_RATES
        )
        await WithdrawalSettingsRepository(session).get_settings()
        await session.commit()
        logger.info(f"Seeded {inserted} commission rate levels")

    await engine.dispose()
    logger.success("Database initialized successfully!")


if __name__ == "__main__":
    asyncio.run(init_database(sys.argv[1] if len(sys.argv) > 1 else None))
