"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Withdrawal settings snapshot
- WithdrawalValidator with mocked repositories
"""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from investnet.services.withdrawal.withdrawal_validator import WithdrawalValidator


@pytest.fixture
def withdrawal_settings():
    """
    Default withdrawal settings.

    Default values:
    - min_withdrawal_amount: 1000
    - max_withdrawal_amount: 100000
    - withdrawal_fee_percent: 0
    - min_balance_required: 0
    """
    return SimpleNamespace(
        min_withdrawal_amount=Decimal("1000"),
        max_withdrawal_amount=Decimal("100000"),
        processing_time_hours=24,
        withdrawal_fee_percent=Decimal("0"),
        min_balance_required=Decimal("0"),
    )


@pytest.fixture
def validator(mock_session, withdrawal_settings):
    """
    Create WithdrawalValidator with an existing owner and 10000 available.

    Args:
        mock_session: Mocked database session
        withdrawal_settings: Settings snapshot

    Returns:
        WithdrawalValidator: Validator for testing
    """
    validator = WithdrawalValidator(mock_session, withdrawal_settings)
    validator.account_repo.get_by_id = AsyncMock(return_value=SimpleNamespace(id=1))
    validator.balance_manager.get_available_balance = AsyncMock(
        return_value=Decimal("10000")
    )
    return validator
