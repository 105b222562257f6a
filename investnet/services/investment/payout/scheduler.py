"""
Payout scheduler module.

Generates the fixed series of monthly ROI earnings for an investment at
activation.
"""

from datetime import datetime
from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.business_constants import MONTHLY_ROI_RATE, PAYOUT_COUNT
from investnet.models.earning import Earning
from investnet.models.enums import EarningStatus, InvestmentStatus
from investnet.models.investment import Investment
from investnet.repositories.earning_repository import EarningRepository
from investnet.utils.datetime_utils import add_months, month_start
from investnet.utils.exceptions import StateConflictError
from investnet.utils.money import quantize_money


def calculate_monthly_payout(amount: Decimal) -> Decimal:
    """Monthly ROI for a principal, rounded to two decimals."""
    return quantize_money(amount * MONTHLY_ROI_RATE)


def payout_dates(start_date: datetime, count: int = PAYOUT_COUNT) -> list[datetime]:
    """
    Scheduled payout dates for an investment.

    The first payout falls on the first day of the month after the
    start month; one payout per calendar month follows.

    Args:
        start_date: Activation time
        count: Number of payouts

    Returns:
        Payout datetimes in ascending order
    """
    base = month_start(start_date)
    return [add_months(base, i) for i in range(1, count + 1)]


class PayoutScheduler:
    """Creates earning rows for activated investments."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize payout scheduler."""
        self.session = session
        self.earning_repo = EarningRepository(session)

    async def generate_schedule(self, investment: Investment) -> list[Earning]:
        """
        Generate the payout schedule of an active investment.

        Runs inside the activation transaction and flushes only, so a
        failure here rolls the activation back with it.

        Args:
            investment: Investment that has just become active

        Returns:
            Created earnings, ordered by payout date

        Raises:
            StateConflictError: If investment is not active, has no start
                date or already has a schedule
        """
        if investment.status != InvestmentStatus.ACTIVE or investment.start_date is None:
            raise StateConflictError(
                f"Investment {investment.id} is not active", "NOT_ACTIVE"
            )

        if await self.earning_repo.count_by_investment(investment.id):
            raise StateConflictError(
                f"Payout schedule already exists for investment {investment.id}",
                "SCHEDULE_EXISTS",
            )

        monthly = calculate_monthly_payout(investment.amount)
        earnings = [
            Earning(
                investment_id=investment.id,
                owner_id=investment.owner_id,
                amount=monthly,
                payout_date=payout_date,
                status=EarningStatus.PENDING.value,
            )
            for payout_date in payout_dates(investment.start_date)
        ]
        self.session.add_all(earnings)
        await self.session.flush()

        logger.info(
            "Payout schedule generated",
            extra={
                "investment_id": investment.id,
                "payouts": len(earnings),
                "monthly_amount": str(monthly),
            },
        )

        return earnings
