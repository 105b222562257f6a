"""
Unit tests for withdrawal eligibility.

Tests cover:
- Check order (minimum, maximum, balance)
- Reason strings and codes
- Retained balance floor
- Settings freshness across checks
- Fee split
"""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from investnet.services.withdrawal.withdrawal_request_handler import calculate_fee
from investnet.services.withdrawal.withdrawal_validator import WithdrawalValidator
from investnet.utils.exceptions import NotFoundError, ValidationError


class TestEligibilityChecks:
    """Test WithdrawalValidator.check_eligibility with mocked ledger."""

    @pytest.mark.asyncio
    async def test_eligible_request(self, validator):
        result = await validator.check_eligibility(1, Decimal("5000"))

        assert result.eligible is True
        assert result.reason == "Withdrawal request eligible"
        assert result.code is None
        assert result.available_balance == Decimal("10000")

    @pytest.mark.asyncio
    async def test_more_than_available_rejected(self, validator):
        result = await validator.check_eligibility(1, Decimal("12000"))

        assert result.eligible is False
        assert result.reason == "Insufficient available balance"
        assert result.code == "INSUFFICIENT_BALANCE"

    @pytest.mark.asyncio
    async def test_below_minimum(self, validator):
        result = await validator.check_eligibility(1, "999.99")

        assert result.eligible is False
        assert result.reason == "Amount is below minimum withdrawal limit"
        assert result.code == "MIN_AMOUNT"

    @pytest.mark.asyncio
    async def test_above_maximum_checked_before_balance(self, validator):
        result = await validator.check_eligibility(1, Decimal("150000"))

        assert result.reason == "Amount exceeds maximum withdrawal limit"
        assert result.code == "MAX_AMOUNT"
        validator.balance_manager.get_available_balance.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_limits_are_inclusive(self, validator):
        validator.balance_manager.get_available_balance = AsyncMock(
            return_value=Decimal("200000")
        )
        assert (await validator.check_eligibility(1, "1000")).eligible is True
        assert (await validator.check_eligibility(1, "100000")).eligible is True

    @pytest.mark.asyncio
    async def test_retained_floor(self, validator, withdrawal_settings):
        withdrawal_settings.min_balance_required = Decimal("2000")

        allowed = await validator.check_eligibility(1, Decimal("8000"))
        rejected = await validator.check_eligibility(1, Decimal("8000.01"))

        assert allowed.eligible is True
        assert rejected.eligible is False
        assert rejected.reason == "Insufficient available balance"

    @pytest.mark.asyncio
    async def test_settings_read_on_every_check(
        self, mock_session, validator, withdrawal_settings
    ):
        raised = SimpleNamespace(**vars(withdrawal_settings))
        raised.min_withdrawal_amount = Decimal("6000")
        unpinned = WithdrawalValidator(mock_session)
        unpinned.account_repo = validator.account_repo
        unpinned.balance_manager = validator.balance_manager
        unpinned.settings_repo.get_settings = AsyncMock(
            side_effect=[withdrawal_settings, raised]
        )

        first = await unpinned.check_eligibility(1, Decimal("5000"))
        second = await unpinned.check_eligibility(1, Decimal("5000"))

        assert first.eligible is True
        assert second.code == "MIN_AMOUNT"
        assert unpinned.withdrawal_settings is None
        assert unpinned.settings_repo.get_settings.await_count == 2

    @pytest.mark.asyncio
    async def test_malformed_amount_raises(self, validator):
        with pytest.raises(ValidationError):
            await validator.check_eligibility(1, "ten")

    @pytest.mark.asyncio
    async def test_unknown_owner_raises(self, validator):
        validator.account_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await validator.check_eligibility(99, Decimal("5000"))


class TestWithdrawalFee:
    """Test fee calculation."""

    def test_zero_fee(self):
        assert calculate_fee(Decimal("5000"), Decimal("0")) == (
            Decimal("0.00"),
            Decimal("5000"),
        )

    def test_percentage_fee(self):
        fee, net = calculate_fee(Decimal("4000"), Decimal("2.5"))
        assert fee == Decimal("100.00")
        assert net == Decimal("3900.00")

    def test_fee_rounding(self):
        fee, net = calculate_fee(Decimal("1234.56"), Decimal("1.5"))
        assert fee == Decimal("18.52")
        assert fee + net == Decimal("1234.56")
