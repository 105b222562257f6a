"""
Investment portfolio summary.

Aggregates an owner's investments and earnings for dashboards.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.enums import EarningStatus, InvestmentStatus
from investnet.repositories.earning_repository import EarningRepository
from investnet.repositories.investment_repository import InvestmentRepository


@dataclass(frozen=True)
class PortfolioSummary:
    """Owner portfolio figures."""

    total_invested: Decimal
    active_count: int
    pending_count: int
    total_earnings: Decimal
    paid_earnings: Decimal
    pending_earnings: Decimal


class PortfolioService:
    """Builds portfolio summaries."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.investment_repo = InvestmentRepository(session)
        self.earning_repo = EarningRepository(session)

    async def get_summary(self, owner_id: int) -> PortfolioSummary:
        """
        Summarize an owner's portfolio.

        Total invested counts active and completed investments; pending
        counts investments awaiting proof or approval.
        """
        totals = await self.investment_repo.get_owner_totals(owner_id)
        empty = {"count": 0, "amount": Decimal("0")}
        active = totals.get(InvestmentStatus.ACTIVE.value, empty)
        completed = totals.get(InvestmentStatus.COMPLETED.value, empty)
        awaiting_proof = totals.get(InvestmentStatus.PENDING_PROOF.value, empty)
        awaiting_approval = totals.get(InvestmentStatus.PENDING_APPROVAL.value, empty)

        paid = await self.earning_repo.sum_by_owner(owner_id, EarningStatus.PAID)
        pending = await self.earning_repo.sum_by_owner(owner_id, EarningStatus.PENDING)

        return PortfolioSummary(
            total_invested=active["amount"] + completed["amount"],
            active_count=active["count"],
            pending_count=awaiting_proof["count"] + awaiting_approval["count"],
            total_earnings=paid + pending,
            paid_earnings=paid,
            pending_earnings=pending,
        )
