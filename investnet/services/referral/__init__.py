"""
Referral services package.

Contains modular services for referral processing:
- config: Immutable commission rate snapshot
- chain_manager: Attaches new accounts to the ancestor chain
- commission_processor: Fan-out of commissions on first activation
- query_manager: Upline, downline and per-level statistics
- rate_service: Admin maintenance of the commission table
"""

from investnet.services.referral.chain_manager import (
    ReferralChainManager,
    normalize_referral_code,
)
from investnet.services.referral.commission_processor import (
    CommissionProcessor,
    FanOutResult,
    calculate_commission,
)
from investnet.services.referral.config import CommissionRateSnapshot
from investnet.services.referral.query_manager import ReferralQueryManager
from investnet.services.referral.rate_service import CommissionRateService


__all__ = [
    # Configuration
    "CommissionRateSnapshot",
    # Managers
    "ReferralChainManager",
    "ReferralQueryManager",
    "CommissionRateService",
    # Commission processing
    "CommissionProcessor",
    "FanOutResult",
    "calculate_commission",
    "normalize_referral_code",
]
