"""
Investment repository.

Data access layer for Investment model.
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.enums import InvestmentStatus
from investnet.models.investment import Investment
from investnet.repositories.base import BaseRepository


class InvestmentRepository(BaseRepository[Investment]):
    """Investment repository with state-machine primitives."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize investment repository."""
        super().__init__(Investment, session)

    async def get_by_owner(
        self, owner_id: int, status: InvestmentStatus | None = None
    ) -> list[Investment]:
        """
        Get investments of an owner, newest first.

        Args:
            owner_id: Owner account ID
            status: Optional status filter

        Returns:
            List of investments
        """
        stmt = select(Investment).where(Investment.owner_id == owner_id)
        if status:
            stmt = stmt.where(Investment.status == status)
        stmt = stmt.order_by(Investment.created_at.desc(), Investment.id.desc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def transition(
        self,
        investment_id: int,
        from_statuses: Iterable[InvestmentStatus],
        to_status: InvestmentStatus,
        **values: Any,
    ) -> bool:
        """
        Move investment to a new status if it is in an expected one.

        Args:
            investment_id: Investment ID
            from_statuses: Statuses the row must currently have
            to_status: Target status
            **values: Extra columns to set in the same UPDATE

        Returns:
            True if the row moved, False if its status did not match
        """
        updated = await self.update_where(
            [
                Investment.id == investment_id,
                Investment.status.in_([s.value for s in from_statuses]),
            ],
            status=to_status.value,
            **values,
        )
        return updated == 1

    async def get_matured_ids(self, now: datetime) -> list[int]:
        """
        Get IDs of active investments whose term has ended.

        Args:
            now: Reference time

        Returns:
            Investment IDs with end_date <= now
        """
        stmt = select(Investment.id).where(
            Investment.status == InvestmentStatus.ACTIVE.value,
            Investment.end_date <= now,
        )
        result = await self.session.execute(stmt)
        return [row[0] for row in result.all()]

    async def get_owner_totals(self, owner_id: int) -> dict[str, Any]:
        """
        Get invested amount and counts per status for an owner.

        Args:
            owner_id: Owner account ID

        Returns:
            Dict mapping status value to {"count", "amount"}
        """
        stmt = (
            select(
                Investment.status,
                func.count(Investment.id).label("count"),
                func.coalesce(func.sum(Investment.amount), 0).label("amount"),
            )
            .where(Investment.owner_id == owner_id)
            .group_by(Investment.status)
        )
        result = await self.session.execute(stmt)
        return {
            row.status: {"count": row.count, "amount": Decimal(str(row.amount))}
            for row in result.all()
        }
