"""
Earning repository.

Data access layer for Earning model.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.earning import Earning
from investnet.models.enums import EarningStatus
from investnet.repositories.base import BaseRepository


class EarningRepository(BaseRepository[Earning]):
    """Earning repository with ledger sums."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize earning repository."""
        super().__init__(Earning, session)

    async def get_by_investment(self, investment_id: int) -> list[Earning]:
        """Get scheduled earnings of an investment in payout order."""
        stmt = (
            select(Earning)
            .where(Earning.investment_id == investment_id)
            .order_by(Earning.payout_date)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_investment(self, investment_id: int) -> int:
        """Count scheduled earnings of an investment."""
        return await self.count(investment_id=investment_id)

    async def sum_by_owner(
        self, owner_id: int, status: EarningStatus | None = None
    ) -> Decimal:
        """
        Sum earnings of an owner.

        Args:
            owner_id: Owner account ID
            status: Optional status filter

        Returns:
            Total amount (0 if none)
        """
        stmt = select(func.coalesce(func.sum(Earning.amount), 0)).where(
            Earning.owner_id == owner_id
        )
        if status:
            stmt = stmt.where(Earning.status == status.value)

        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar() or 0))
