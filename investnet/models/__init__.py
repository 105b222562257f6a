"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from investnet.models.account import Account
from investnet.models.bank_details import BankDetails
from investnet.models.base import Base
from investnet.models.commission_rate import CommissionRate
from investnet.models.commission_record import CommissionRecord
from investnet.models.earning import Earning
from investnet.models.enums import (
    EarningStatus,
    InvestmentStatus,
    PaymentProofStatus,
    WithdrawalStatus,
)
from investnet.models.investment import Investment
from investnet.models.payment_proof import PaymentProof
from investnet.models.referral_edge import ReferralEdge
from investnet.models.withdrawal import Withdrawal
from investnet.models.withdrawal_settings import WithdrawalSettings

__all__ = [
    # Base
    "Base",
    # Enums
    "EarningStatus",
    "InvestmentStatus",
    "PaymentProofStatus",
    "WithdrawalStatus",
    # Core ledger
    "Account",
    "ReferralEdge",
    "Investment",
    "PaymentProof",
    "Earning",
    "CommissionRecord",
    # Configuration
    "CommissionRate",
    "WithdrawalSettings",
    # Withdrawals
    "BankDetails",
    "Withdrawal",
]
