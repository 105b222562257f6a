"""
Withdrawal balance manager.

Derives an owner's available balance from the earnings and withdrawal
ledgers and serializes concurrent withdrawal requests per owner.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.account import Account
from investnet.models.enums import EarningStatus, WithdrawalStatus
from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.earning_repository import EarningRepository
from investnet.repositories.withdrawal_repository import WithdrawalRepository
from investnet.utils.datetime_utils import utc_now
from investnet.utils.exceptions import NotFoundError

# Withdrawals still holding balance
RESERVING_STATUSES = (
    WithdrawalStatus.PENDING,
    WithdrawalStatus.PROCESSING,
)


class WithdrawalBalanceManager:
    """Manages balance queries for withdrawal requests."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal balance manager.

        Args:
            session: Database session
        """
        self.session = session
        self.account_repo = AccountRepository(session)
        self.earning_repo = EarningRepository(session)
        self.withdrawal_repo = WithdrawalRepository(session)

    async def get_available_balance(self, owner_id: int) -> Decimal:
        """
        Paid earnings minus pending and processing withdrawals.

        Args:
            owner_id: Owner account ID

        Returns:
            Available balance (may be negative if settings changed)
        """
        paid = await self.earning_repo.sum_by_owner(owner_id, EarningStatus.PAID)
        reserved = await self.withdrawal_repo.sum_by_owner(
            owner_id, RESERVING_STATUSES
        )
        return paid - reserved

    async def lock_owner(self, owner_id: int) -> Account:
        """
        Take the owner's row lock for the rest of the transaction.

        A touching UPDATE locks the row on PostgreSQL and takes the
        write lock on SQLite, so the balance read that follows cannot
        interleave with another request from the same owner.

        Args:
            owner_id: Owner account ID

        Returns:
            Owner account

        Raises:
            NotFoundError: If account does not exist
        """
        touched = await self.account_repo.update_where(
            [Account.id == owner_id], updated_at=utc_now()
        )
        if not touched:
            raise NotFoundError(f"Account {owner_id} not found")
        return await self.account_repo.get_by_id(owner_id)
