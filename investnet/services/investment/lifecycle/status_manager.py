"""
Investment status manager module.

Owner cancellation and term completion.
"""

from datetime import datetime

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.enums import InvestmentStatus
from investnet.models.investment import Investment
from investnet.repositories.investment_repository import InvestmentRepository
from investnet.utils.datetime_utils import utc_now
from investnet.utils.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StateConflictError,
)

CANCELLABLE_STATUSES = (
    InvestmentStatus.PENDING_PROOF,
    InvestmentStatus.PENDING_APPROVAL,
)


class InvestmentStatusManager:
    """Manages investment status transitions outside the admin decision."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize status manager."""
        self.session = session
        self.investment_repo = InvestmentRepository(session)

    async def cancel(self, investment_id: int, owner_id: int) -> Investment:
        """
        Cancel an undecided investment.

        Args:
            investment_id: Investment ID
            owner_id: Requesting account (must own the investment)

        Returns:
            Cancelled investment

        Raises:
            NotFoundError: If investment does not exist
            PermissionDeniedError: If caller is not the owner
            StateConflictError: If investment was already decided
        """
        try:
            investment = await self.investment_repo.get_by_id(investment_id)
            if investment is None:
                raise NotFoundError(f"Investment {investment_id} not found")
            if investment.owner_id != owner_id:
                raise PermissionDeniedError("Not the owner of this investment")

            moved = await self.investment_repo.transition(
                investment_id, CANCELLABLE_STATUSES, InvestmentStatus.CANCELLED
            )
            if not moved:
                raise StateConflictError(
                    f"Investment {investment_id} can no longer be cancelled"
                )

            await self.session.commit()
            await self.session.refresh(investment)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Investment cancelled",
            extra={"investment_id": investment_id, "owner_id": owner_id},
        )

        return investment

    async def complete_matured(self, now: datetime | None = None) -> int:
        """
        Complete active investments whose term has ended.

        Each investment moves with its own conditional update, so an
        investment changed concurrently is simply not counted.

        Args:
            now: Reference time (defaults to current UTC time)

        Returns:
            Number of investments completed
        """
        now = now or utc_now()

        try:
            completed = 0
            for investment_id in await self.investment_repo.get_matured_ids(now):
                if await self.investment_repo.transition(
                    investment_id,
                    [InvestmentStatus.ACTIVE],
                    InvestmentStatus.COMPLETED,
                ):
                    completed += 1

            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        if completed:
            logger.info(
                "Matured investments completed",
                extra={"completed": completed, "as_of": now.isoformat()},
            )

        return completed
