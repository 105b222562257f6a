"""
Commission repository.

Data access layer for CommissionRecord and CommissionRate models.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.commission_rate import CommissionRate
from investnet.models.commission_record import CommissionRecord
from investnet.repositories.base import BaseRepository


class CommissionRecordRepository(BaseRepository[CommissionRecord]):
    """Commission ledger repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize commission record repository."""
        super().__init__(CommissionRecord, session)

    async def get_by_investment(self, investment_id: int) -> list[CommissionRecord]:
        """Get commissions paid for an investment, by level."""
        stmt = (
            select(CommissionRecord)
            .where(CommissionRecord.investment_id == investment_id)
            .order_by(CommissionRecord.level)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_ancestor(self, ancestor_id: int) -> list[CommissionRecord]:
        """Get commissions earned by an account, newest first."""
        stmt = (
            select(CommissionRecord)
            .where(CommissionRecord.ancestor_id == ancestor_id)
            .order_by(CommissionRecord.earned_at.desc(), CommissionRecord.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class CommissionRateRepository(BaseRepository[CommissionRate]):
    """Per-level commission rate repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize commission rate repository."""
        super().__init__(CommissionRate, session)

    async def get_all_rates(self) -> dict[int, Decimal]:
        """
        Get configured rates.

        Returns:
            Dict mapping level to rate percentage
        """
        result = await self.session.execute(
            select(CommissionRate).order_by(CommissionRate.level)
        )
        return {row.level: row.rate for row in result.scalars().all()}

    async def upsert_rate(self, level: int, rate: Decimal) -> CommissionRate:
        """
        Set rate for a level, creating the row if missing.

        Args:
            level: Referral level (1-10)
            rate: Percentage (0-100)

        Returns:
            Stored rate row
        """
        existing = await self.session.get(CommissionRate, level)
        if existing is None:
            return await self.create(level=level, rate=rate)

        existing.rate = rate
        existing.updated_at = datetime.now(UTC)
        await self.session.flush()
        return existing

    async def seed_defaults(self, defaults: dict[int, Decimal]) -> int:
        """
        Insert default rates for levels that have none.

        Args:
            defaults: Dict mapping level to rate percentage

        Returns:
            Number of rows inserted
        """
        inserted = 0
        for level, rate in defaults.items():
            if await self.insert_ignore({"level": level, "rate": rate}):
                inserted += 1
        return inserted
