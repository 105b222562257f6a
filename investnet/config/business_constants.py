"""
Business logic constants.

Central location for business rules used across the application:
referral depth and cap, investment term, ROI rate and default
commission / withdrawal configuration.
"""

from decimal import Decimal

# Referral graph
REFERRAL_DEPTH = 10
MAX_DIRECT_REFERRALS = 10

# Referral codes: "RF" + 6 upper-case hex characters
REFERRAL_CODE_PREFIX = "RF"
REFERRAL_CODE_LENGTH = 6
REFERRAL_CODE_MAX_ATTEMPTS = 20

# Investment term and ROI
INVESTMENT_TERM_MONTHS = 40
PAYOUT_COUNT = 40
MONTHLY_ROI_RATE = Decimal("0.05")  # 5% of principal per month

# Two-decimal money precision
MONEY_QUANT = Decimal("0.01")

# Commission percentage per referral level (1 = direct inviter)
DEFAULT_COMMISSION_RATES: dict[int, Decimal] = {
    1: Decimal("10.00"),
    2: Decimal("8.00"),
    3: Decimal("6.00"),
    4: Decimal("4.00"),
    5: Decimal("2.00"),
    6: Decimal("2.00"),
    7: Decimal("2.00"),
    8: Decimal("2.00"),
    9: Decimal("2.00"),
    10: Decimal("2.00"),
}

# Withdrawal settings seeded into the singleton row
DEFAULT_MIN_WITHDRAWAL_AMOUNT = Decimal("1000")
DEFAULT_MAX_WITHDRAWAL_AMOUNT = Decimal("100000")
DEFAULT_PROCESSING_TIME_HOURS = 24
DEFAULT_WITHDRAWAL_FEE_PERCENT = Decimal("0")
DEFAULT_MIN_BALANCE_REQUIRED = Decimal("0")

# Bank details
IFSC_CODE_PATTERN = r"^[A-Z]{4}0[A-Z0-9]{6}$"


class Role:
    """Account role constants."""

    ADMIN = "admin"
    AGENT = "agent"
