"""Investment payout scheduling."""

from investnet.services.investment.payout.scheduler import (
    PayoutScheduler,
    calculate_monthly_payout,
    payout_dates,
)

__all__ = ["PayoutScheduler", "calculate_monthly_payout", "payout_dates"]
