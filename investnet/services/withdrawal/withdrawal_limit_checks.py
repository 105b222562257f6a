"""
Withdrawal limit checks module.

Contains the ordered limit checks:
- Minimum amount check
- Maximum amount check
- Available balance and retained floor check
"""

from decimal import Decimal

from loguru import logger

from investnet.models.withdrawal_settings import WithdrawalSettings

BELOW_MINIMUM = "Amount is below minimum withdrawal limit"
ABOVE_MAXIMUM = "Amount exceeds maximum withdrawal limit"
INSUFFICIENT_BALANCE = "Insufficient available balance"
ELIGIBLE = "Withdrawal request eligible"


class LimitChecksMixin:
    """Mixin providing withdrawal limit checks."""

    async def check_min_amount(
        self, amount: Decimal, withdrawal_settings: WithdrawalSettings
    ) -> tuple[bool, str | None]:
        """
        Check if withdrawal amount meets minimum requirement.

        Args:
            amount: Withdrawal amount
            withdrawal_settings: Settings snapshot for this check

        Returns:
            Tuple of (is_valid, error_message)
        """
        if amount < withdrawal_settings.min_withdrawal_amount:
            return False, BELOW_MINIMUM
        return True, None

    async def check_max_amount(
        self, amount: Decimal, withdrawal_settings: WithdrawalSettings
    ) -> tuple[bool, str | None]:
        """
        Check if withdrawal amount is within the maximum.

        Args:
            amount: Withdrawal amount
            withdrawal_settings: Settings snapshot for this check

        Returns:
            Tuple of (is_valid, error_message)
        """
        if amount > withdrawal_settings.max_withdrawal_amount:
            return False, ABOVE_MAXIMUM
        return True, None

    async def check_balance(
        self,
        owner_id: int,
        amount: Decimal,
        available_balance: Decimal,
        withdrawal_settings: WithdrawalSettings,
    ) -> tuple[bool, str | None]:
        """
        Check that the balance left after withdrawal stays above the floor.

        Args:
            owner_id: Owner account ID
            amount: Withdrawal amount
            available_balance: Owner's available balance
            withdrawal_settings: Settings snapshot for this check

        Returns:
            Tuple of (is_valid, error_message)
        """
        floor = withdrawal_settings.min_balance_required
        if available_balance - amount < floor:
            logger.warning(
                f"Insufficient balance for account {owner_id}: "
                f"requested={amount}, available={available_balance}, floor={floor}"
            )
            return False, INSUFFICIENT_BALANCE
        return True, None
