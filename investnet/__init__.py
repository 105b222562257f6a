"""
investnet - investment and referral commission ledger core.

Referral graph construction, investment lifecycle, payout schedules,
commission fan-out and withdrawal eligibility on top of async SQLAlchemy.
"""

__version__ = "1.0.0"
