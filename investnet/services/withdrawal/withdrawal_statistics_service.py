"""
Withdrawal statistics service module.

Per-owner withdrawal summary.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.enums import WithdrawalStatus
from investnet.repositories.withdrawal_repository import WithdrawalRepository
from investnet.services.withdrawal.withdrawal_balance_manager import (
    WithdrawalBalanceManager,
)


@dataclass(frozen=True)
class WithdrawalSummary:
    """Owner withdrawal figures."""

    total_withdrawn: Decimal
    pending_amount: Decimal
    available_balance: Decimal


class WithdrawalStatisticsService:
    """Handles withdrawal statistics."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal statistics service.

        Args:
            session: Database session
        """
        self.session = session
        self.withdrawal_repo = WithdrawalRepository(session)
        self.balance_manager = WithdrawalBalanceManager(session)

    async def get_withdrawal_summary(self, owner_id: int) -> WithdrawalSummary:
        """
        Get an owner's withdrawal summary.

        Returns:
            Completed total, amount still in pending/processing and the
            current available balance
        """
        withdrawn = await self.withdrawal_repo.sum_by_owner(
            owner_id, [WithdrawalStatus.COMPLETED]
        )
        pending = await self.withdrawal_repo.sum_by_owner(
            owner_id, [WithdrawalStatus.PENDING, WithdrawalStatus.PROCESSING]
        )
        available = await self.balance_manager.get_available_balance(owner_id)

        return WithdrawalSummary(
            total_withdrawn=withdrawn,
            pending_amount=pending,
            available_balance=available,
        )
