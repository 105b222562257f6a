"""
Commission fan-out processor.

On an owner's first activated investment, writes one commission record
per ancestor edge. Records are keyed by (ancestor, descendant,
investment, level) so re-running the fan-out never duplicates a payout.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.investment import Investment
from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.commission_repository import CommissionRecordRepository
from investnet.repositories.referral_repository import ReferralRepository
from investnet.services.referral.config import CommissionRateSnapshot
from investnet.services.referral.rate_service import CommissionRateService
from investnet.utils.datetime_utils import utc_now
from investnet.utils.exceptions import NotFoundError
from investnet.utils.money import quantize_money


@dataclass
class FanOutResult:
    """Result of a commission fan-out."""

    qualifying: bool
    created: int = 0
    skipped: int = 0
    total_commission: Decimal = Decimal("0")
    levels: list[int] = field(default_factory=list)


def calculate_commission(base_amount: Decimal, rate: Decimal) -> Decimal:
    """
    Calculate commission for one level.

    Args:
        base_amount: Investment principal
        rate: Percentage (10 means 10%)

    Returns:
        Commission rounded half up to two decimals
    """
    return quantize_money(base_amount * rate / Decimal("100"))


class CommissionProcessor:
    """Distributes referral commissions for a qualifying investment."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize commission processor.

        Args:
            session: Async database session
        """
        self.session = session
        self.account_repo = AccountRepository(session)
        self.referral_repo = ReferralRepository(session)
        self.record_repo = CommissionRecordRepository(session)
        self.rate_service = CommissionRateService(session)

    async def is_qualifying(self, investment: Investment) -> bool:
        """
        Check whether this investment is the owner's first activation.

        Args:
            investment: Activated investment

        Returns:
            True if the owner's first-activation marker points at it
        """
        owner = await self.account_repo.get_by_id(investment.owner_id)
        if owner is None:
            raise NotFoundError(f"Account {investment.owner_id} not found")
        await self.session.refresh(owner)
        return owner.first_investment_id == investment.id

    async def distribute_commission(
        self,
        investment: Investment,
        snapshot: CommissionRateSnapshot | None = None,
    ) -> FanOutResult:
        """
        Write commission records for every ancestor of the owner.

        Reads the already-materialized edges; does not walk the chain.
        Unique conflicts are counted as skipped. Any other failure
        propagates so the enclosing transaction rolls back. Flushes only.

        Args:
            investment: Activated investment
            snapshot: Rates to use (loaded once if omitted)

        Returns:
            FanOutResult with created/skipped counts
        """
        if not await self.is_qualifying(investment):
            logger.debug(
                "Fan-out skipped: not the owner's first activation",
                extra={"investment_id": investment.id, "owner_id": investment.owner_id},
            )
            return FanOutResult(qualifying=False)

        if snapshot is None:
            snapshot = await self.rate_service.get_snapshot()

        edges = await self.referral_repo.get_ancestor_edges(investment.owner_id)
        result = FanOutResult(qualifying=True)
        earned_at = utc_now()

        for edge in edges:
            rate = snapshot.rate_for(edge.level)
            amount = calculate_commission(investment.amount, rate)

            inserted = await self.record_repo.insert_ignore(
                {
                    "ancestor_id": edge.ancestor_id,
                    "descendant_id": investment.owner_id,
                    "investment_id": investment.id,
                    "level": edge.level,
                    "base_amount": investment.amount,
                    "commission_rate": rate,
                    "commission_amount": amount,
                    "earned_at": earned_at,
                }
            )
            if inserted:
                result.created += 1
                result.total_commission += amount
                result.levels.append(edge.level)
            else:
                result.skipped += 1

        logger.info(
            "Referral commissions distributed",
            extra={
                "investment_id": investment.id,
                "owner_id": investment.owner_id,
                "created": result.created,
                "skipped": result.skipped,
                "total_commission": str(result.total_commission),
            },
        )

        return result
