"""
Withdrawal repository.

Data access layer for Withdrawal, BankDetails and WithdrawalSettings.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.bank_details import BankDetails
from investnet.models.enums import WithdrawalStatus
from investnet.models.withdrawal import Withdrawal
from investnet.models.withdrawal_settings import WithdrawalSettings
from investnet.repositories.base import BaseRepository

SETTINGS_ROW_ID = 1


class WithdrawalRepository(BaseRepository[Withdrawal]):
    """Withdrawal repository with balance sums."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize withdrawal repository."""
        super().__init__(Withdrawal, session)

    async def get_by_owner(
        self, owner_id: int, status: WithdrawalStatus | None = None
    ) -> list[Withdrawal]:
        """Get withdrawals of an owner, newest first."""
        stmt = select(Withdrawal).where(Withdrawal.owner_id == owner_id)
        if status:
            stmt = stmt.where(Withdrawal.status == status.value)
        stmt = stmt.order_by(Withdrawal.created_at.desc(), Withdrawal.id.desc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def sum_by_owner(
        self, owner_id: int, statuses: Iterable[WithdrawalStatus]
    ) -> Decimal:
        """
        Sum requested amounts of an owner's withdrawals.

        Args:
            owner_id: Owner account ID
            statuses: Statuses to include

        Returns:
            Total amount (0 if none)
        """
        stmt = select(func.coalesce(func.sum(Withdrawal.amount), 0)).where(
            Withdrawal.owner_id == owner_id,
            Withdrawal.status.in_([s.value for s in statuses]),
        )
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar() or 0))

    async def transition(
        self,
        withdrawal_id: int,
        from_statuses: Iterable[WithdrawalStatus],
        to_status: WithdrawalStatus,
        **values: Any,
    ) -> bool:
        """
        Move withdrawal to a new status if it is in an expected one.

        Returns:
            True if the row moved, False if its status did not match
        """
        updated = await self.update_where(
            [
                Withdrawal.id == withdrawal_id,
                Withdrawal.status.in_([s.value for s in from_statuses]),
            ],
            status=to_status.value,
            **values,
        )
        return updated == 1


class BankDetailsRepository(BaseRepository[BankDetails]):
    """Bank details repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize bank details repository."""
        super().__init__(BankDetails, session)

    async def get_by_owner(self, owner_id: int) -> BankDetails | None:
        """Get an owner's bank details."""
        return await self.get_by(owner_id=owner_id)


class WithdrawalSettingsRepository(BaseRepository[WithdrawalSettings]):
    """Singleton withdrawal settings repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize withdrawal settings repository."""
        super().__init__(WithdrawalSettings, session)

    async def get_settings(self) -> WithdrawalSettings:
        """
        Get withdrawal settings, creating the default row if missing.

        Returns:
            Settings row
        """
        current = await self.get_by_id(SETTINGS_ROW_ID)
        if current is not None:
            return current

        await self.insert_ignore({"id": SETTINGS_ROW_ID})
        return await self.get_by_id(SETTINGS_ROW_ID)
