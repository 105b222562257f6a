"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment for tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from collections.abc import Awaitable, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from investnet.config.business_constants import DEFAULT_COMMISSION_RATES, Role
from investnet.config.database import create_engine, create_session_maker
from investnet.models import Account, Base
from investnet.repositories.commission_repository import CommissionRateRepository
from investnet.repositories.withdrawal_repository import WithdrawalSettingsRepository
from investnet.services.account.registration import AccountRegistrationService


@pytest.fixture
def mock_session():
    """Mock AsyncSession for tests without a database."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session


@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed SQLite engine with all tables created."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    """Session factory over a seeded database."""
    maker = create_session_maker(engine)
    async with maker() as session:
        await CommissionRateRepository(session).seed_defaults(DEFAULT_COMMISSION_RATES)
        await WithdrawalSettingsRepository(session).get_settings()
        await session.commit()
    return maker


@pytest_asyncio.fixture
async def session(session_maker):
    """Database session for one test."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def register(session) -> Callable[..., Awaitable[Account]]:
    """Factory registering accounts through the registration service."""

    async def _register(
        referrer_code: str | None = None,
        full_name: str = "Test Agent",
        role: str = Role.AGENT,
    ) -> Account:
        service = AccountRegistrationService(session)
        return await service.register_account(
            full_name=full_name, referrer_code=referrer_code, role=role
        )

    return _register


@pytest_asyncio.fixture
async def admin(register) -> Account:
    """Administrator account."""
    return await register(full_name="Platform Admin", role=Role.ADMIN)
