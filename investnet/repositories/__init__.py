"""
Repositories.

Data access layer over the async SQLAlchemy session. Repositories flush
but never commit; transactions belong to the calling service.
"""

from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.base import BaseRepository
from investnet.repositories.commission_repository import (
    CommissionRateRepository,
    CommissionRecordRepository,
)
from investnet.repositories.earning_repository import EarningRepository
from investnet.repositories.investment_repository import InvestmentRepository
from investnet.repositories.payment_proof_repository import PaymentProofRepository
from investnet.repositories.referral_repository import ReferralRepository
from investnet.repositories.withdrawal_repository import (
    BankDetailsRepository,
    WithdrawalRepository,
    WithdrawalSettingsRepository,
)

__all__ = [
    "BaseRepository",
    "AccountRepository",
    "ReferralRepository",
    "InvestmentRepository",
    "PaymentProofRepository",
    "EarningRepository",
    "CommissionRecordRepository",
    "CommissionRateRepository",
    "WithdrawalRepository",
    "BankDetailsRepository",
    "WithdrawalSettingsRepository",
]
