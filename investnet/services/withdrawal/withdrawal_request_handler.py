"""
Withdrawal request handling module.

Handles withdrawal creation and owner cancellation.
"""

from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.enums import WithdrawalStatus
from investnet.models.withdrawal import Withdrawal
from investnet.repositories.withdrawal_repository import (
    BankDetailsRepository,
    WithdrawalRepository,
    WithdrawalSettingsRepository,
)
from investnet.services.withdrawal.withdrawal_balance_manager import (
    WithdrawalBalanceManager,
)
from investnet.services.withdrawal.withdrawal_validator import WithdrawalValidator
from investnet.utils.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StateConflictError,
    ValidationError,
)
from investnet.utils.money import parse_amount, quantize_money


def calculate_fee(amount: Decimal, fee_percent: Decimal) -> tuple[Decimal, Decimal]:
    """
    Split a withdrawal into fee and net amount.

    Args:
        amount: Gross withdrawal amount
        fee_percent: Fee percentage (2.5 means 2.5%)

    Returns:
        Tuple of (fee_amount, net_amount)
    """
    fee = quantize_money(amount * fee_percent / Decimal("100"))
    return fee, amount - fee


class WithdrawalRequestHandler:
    """Handles withdrawal request creation and cancellation."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal request handler.

        Args:
            session: Database session
        """
        self.session = session
        self.withdrawal_repo = WithdrawalRepository(session)
        self.bank_repo = BankDetailsRepository(session)
        self.settings_repo = WithdrawalSettingsRepository(session)
        self.balance_manager = WithdrawalBalanceManager(session)

    async def create_withdrawal(
        self, owner_id: int, amount: Decimal | int | str
    ) -> Withdrawal:
        """
        Create withdrawal request after a successful eligibility check.

        Args:
            owner_id: Owner account ID
            amount: Gross withdrawal amount

        Returns:
            Created withdrawal in pending status

        Raises:
            ValidationError: If amount is malformed, the request is not
                eligible or no verified bank details are on file
            NotFoundError: If owner does not exist
        """
        value = parse_amount(amount)

        try:
            await self.balance_manager.lock_owner(owner_id)

            withdrawal_settings = await self.settings_repo.get_settings()
            validator = WithdrawalValidator(self.session, withdrawal_settings)
            result = await validator.check_eligibility(owner_id, value)
            if not result.eligible:
                raise ValidationError(result.reason, result.code)

            bank_details = await self.bank_repo.get_by_owner(owner_id)
            if bank_details is None or not bank_details.verified:
                raise ValidationError(
                    "Verified bank details are required", "BANK_DETAILS_UNVERIFIED"
                )

            fee, net = calculate_fee(value, withdrawal_settings.withdrawal_fee_percent)
            withdrawal = await self.withdrawal_repo.create(
                owner_id=owner_id,
                bank_details_id=bank_details.id,
                amount=value,
                fee_amount=fee,
                net_amount=net,
                status=WithdrawalStatus.PENDING.value,
            )

            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Withdrawal requested",
            extra={
                "withdrawal_id": withdrawal.id,
                "owner_id": owner_id,
                "amount": str(value),
                "fee": str(fee),
            },
        )

        return withdrawal

    async def cancel_withdrawal(self, withdrawal_id: int, owner_id: int) -> Withdrawal:
        """
        Cancel a still-pending withdrawal.

        Args:
            withdrawal_id: Withdrawal ID
            owner_id: Requesting account (must own the withdrawal)

        Returns:
            Cancelled withdrawal

        Raises:
            NotFoundError: If withdrawal does not exist
            PermissionDeniedError: If caller is not the owner
            StateConflictError: If withdrawal is no longer pending
        """
        try:
            withdrawal = await self.withdrawal_repo.get_by_id(withdrawal_id)
            if withdrawal is None:
                raise NotFoundError(f"Withdrawal {withdrawal_id} not found")
            if withdrawal.owner_id != owner_id:
                raise PermissionDeniedError("Not the owner of this withdrawal")

            moved = await self.withdrawal_repo.transition(
                withdrawal_id,
                [WithdrawalStatus.PENDING],
                WithdrawalStatus.CANCELLED,
            )
            if not moved:
                raise StateConflictError(
                    f"Withdrawal {withdrawal_id} can no longer be cancelled"
                )

            await self.session.refresh(withdrawal)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Withdrawal cancelled",
            extra={"withdrawal_id": withdrawal_id, "owner_id": owner_id},
        )

        return withdrawal
