"""
Investment lifecycle management.

Handles investment creation, proof submission, admin decisions and
status management.
"""

from investnet.services.investment.lifecycle.creator import InvestmentCreator
from investnet.services.investment.lifecycle.decision import (
    InvestmentDecisionHandler,
)
from investnet.services.investment.lifecycle.proof import InvestmentProofHandler
from investnet.services.investment.lifecycle.status_manager import (
    InvestmentStatusManager,
)


__all__ = [
    "InvestmentCreator",
    "InvestmentProofHandler",
    "InvestmentDecisionHandler",
    "InvestmentStatusManager",
]
