"""
Withdrawal services package.

- withdrawal_validator: eligibility evaluation
- withdrawal_limit_checks: ordered min/max/balance checks
- withdrawal_balance_manager: available balance and per-owner locking
- withdrawal_request_handler: owner create/cancel
- withdrawal_lifecycle_handler: admin status changes
- bank_details_service: payout destinations
- withdrawal_statistics_service: owner summary
"""

from investnet.services.withdrawal.bank_details_service import BankDetailsService
from investnet.services.withdrawal.withdrawal_balance_manager import (
    WithdrawalBalanceManager,
)
from investnet.services.withdrawal.withdrawal_lifecycle_handler import (
    WithdrawalLifecycleHandler,
)
from investnet.services.withdrawal.withdrawal_request_handler import (
    WithdrawalRequestHandler,
    calculate_fee,
)
from investnet.services.withdrawal.withdrawal_statistics_service import (
    WithdrawalStatisticsService,
    WithdrawalSummary,
)
from investnet.services.withdrawal.withdrawal_validator import (
    EligibilityResult,
    WithdrawalValidator,
)

__all__ = [
    "BankDetailsService",
    "EligibilityResult",
    "WithdrawalBalanceManager",
    "WithdrawalLifecycleHandler",
    "WithdrawalRequestHandler",
    "WithdrawalStatisticsService",
    "WithdrawalSummary",
    "WithdrawalValidator",
    "calculate_fee",
]
