"""
Withdrawal validation service.

Evaluates withdrawal eligibility against the configured limits and
the owner's available balance.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.withdrawal_settings import WithdrawalSettings
from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.withdrawal_repository import WithdrawalSettingsRepository
from investnet.services.withdrawal.withdrawal_balance_manager import (
    WithdrawalBalanceManager,
)
from investnet.services.withdrawal.withdrawal_limit_checks import (
    ELIGIBLE,
    LimitChecksMixin,
)
from investnet.utils.exceptions import NotFoundError
from investnet.utils.money import parse_amount


@dataclass
class EligibilityResult:
    """Result of a withdrawal eligibility check."""

    eligible: bool
    reason: str
    code: str | None = None
    available_balance: Decimal | None = None

    @classmethod
    def success(cls, available_balance: Decimal) -> "EligibilityResult":
        """Create an eligible result."""
        return cls(eligible=True, reason=ELIGIBLE, available_balance=available_balance)

    @classmethod
    def error(
        cls, reason: str, code: str, available_balance: Decimal | None = None
    ) -> "EligibilityResult":
        """Create a rejected result."""
        return cls(
            eligible=False,
            reason=reason,
            code=code,
            available_balance=available_balance,
        )


class WithdrawalValidator(LimitChecksMixin):
    """Validator for withdrawal requests."""

    def __init__(
        self,
        session: AsyncSession,
        withdrawal_settings: WithdrawalSettings | None = None,
    ) -> None:
        """
        Initialize withdrawal validator.

        Args:
            session: Database session
            withdrawal_settings: Settings snapshot to pin (current settings
                are read on every check if omitted)
        """
        self.session = session
        self.withdrawal_settings = withdrawal_settings
        self.settings_repo = WithdrawalSettingsRepository(session)
        self.account_repo = AccountRepository(session)
        self.balance_manager = WithdrawalBalanceManager(session)

    async def check_eligibility(
        self, owner_id: int, amount: Decimal | int | str
    ) -> EligibilityResult:
        """
        Run limit checks in order and return the first failure.

        Args:
            owner_id: Owner account ID
            amount: Requested withdrawal amount

        Returns:
            EligibilityResult with eligible flag, reason and code

        Raises:
            ValidationError: If amount is malformed
            NotFoundError: If owner does not exist
        """
        value = parse_amount(amount)

        if await self.account_repo.get_by_id(owner_id) is None:
            raise NotFoundError(f"Account {owner_id} not found")

        withdrawal_settings = self.withdrawal_settings
        if withdrawal_settings is None:
            withdrawal_settings = await self.settings_repo.get_settings()

        # 1. Check minimum amount
        is_valid, error_msg = await self.check_min_amount(value, withdrawal_settings)
        if not is_valid:
            return EligibilityResult.error(error_msg, "MIN_AMOUNT")

        # 2. Check maximum amount
        is_valid, error_msg = await self.check_max_amount(value, withdrawal_settings)
        if not is_valid:
            return EligibilityResult.error(error_msg, "MAX_AMOUNT")

        # 3. Check balance and retained floor
        available = await self.balance_manager.get_available_balance(owner_id)
        is_valid, error_msg = await self.check_balance(
            owner_id, value, available, withdrawal_settings
        )
        if not is_valid:
            return EligibilityResult.error(error_msg, "INSUFFICIENT_BALANCE", available)

        return EligibilityResult.success(available)
