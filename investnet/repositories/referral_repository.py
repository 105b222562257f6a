"""
Referral repository.

Data access layer for ReferralEdge model.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.business_constants import REFERRAL_DEPTH
from investnet.models.account import Account
from investnet.models.commission_record import CommissionRecord
from investnet.models.referral_edge import ReferralEdge
from investnet.repositories.base import BaseRepository


class ReferralRepository(BaseRepository[ReferralEdge]):
    """Referral edge repository with chain and downline queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize referral repository."""
        super().__init__(ReferralEdge, session)

    async def get_direct_inviter_id(self, account_id: int) -> int | None:
        """
        Get the level-1 ancestor of an account.

        Args:
            account_id: Descendant account ID

        Returns:
            Inviter account ID or None for a root account
        """
        stmt = select(ReferralEdge.ancestor_id).where(
            ReferralEdge.descendant_id == account_id,
            ReferralEdge.level == 1,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_ancestor_edges(self, account_id: int) -> list[ReferralEdge]:
        """
        Get all edges where account is the descendant, ordered by level.

        Args:
            account_id: Descendant account ID

        Returns:
            Edges from level 1 upwards
        """
        stmt = (
            select(ReferralEdge)
            .where(ReferralEdge.descendant_id == account_id)
            .order_by(ReferralEdge.level)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_downline_by_level(
        self, account_id: int, level: int
    ) -> list[Account]:
        """
        Get descendants of an account at a specific level.

        Args:
            account_id: Ancestor account ID
            level: Referral level (1-10)

        Returns:
            Descendant accounts ordered by signup time
        """
        stmt = (
            select(Account)
            .join(ReferralEdge, ReferralEdge.descendant_id == Account.id)
            .where(
                ReferralEdge.ancestor_id == account_id,
                ReferralEdge.level == level,
            )
            .order_by(Account.created_at, Account.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_level_counts(self, account_id: int) -> dict[int, int]:
        """
        Get downline counts for all levels in a single query.

        Args:
            account_id: Ancestor account ID

        Returns:
            Dict mapping level (1-10) to count, zero-filled
        """
        stmt = (
            select(ReferralEdge.level, func.count(ReferralEdge.id).label("count"))
            .where(ReferralEdge.ancestor_id == account_id)
            .group_by(ReferralEdge.level)
        )
        result = await self.session.execute(stmt)

        counts = {level: 0 for level in range(1, REFERRAL_DEPTH + 1)}
        for row in result.all():
            counts[row.level] = row.count
        return counts

    async def get_commission_totals(self, account_id: int) -> dict[int, Decimal]:
        """
        Get commission earned per level in a single query.

        Args:
            account_id: Ancestor account ID

        Returns:
            Dict mapping level (1-10) to total commission, zero-filled
        """
        stmt = (
            select(
                CommissionRecord.level,
                func.coalesce(func.sum(CommissionRecord.commission_amount), 0).label(
                    "total"
                ),
            )
            .where(CommissionRecord.ancestor_id == account_id)
            .group_by(CommissionRecord.level)
        )
        result = await self.session.execute(stmt)

        totals = {level: Decimal("0") for level in range(1, REFERRAL_DEPTH + 1)}
        for row in result.all():
            # SQLite returns float sums
            totals[row.level] = Decimal(str(row.total))
        return totals
