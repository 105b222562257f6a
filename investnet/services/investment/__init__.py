"""
Investment services package.

- lifecycle: creation, proof submission, admin decisions, status changes
- payout: monthly ROI schedule generation
- portfolio: owner summaries
"""

from investnet.services.investment.lifecycle import (
    InvestmentCreator,
    InvestmentDecisionHandler,
    InvestmentProofHandler,
    InvestmentStatusManager,
)
from investnet.services.investment.payout import PayoutScheduler
from investnet.services.investment.portfolio import PortfolioService, PortfolioSummary


__all__ = [
    "InvestmentCreator",
    "InvestmentProofHandler",
    "InvestmentDecisionHandler",
    "InvestmentStatusManager",
    "PayoutScheduler",
    "PortfolioService",
    "PortfolioSummary",
]
