"""
Standard type definitions for database models.

Provides consistent types for monetary and percentage fields across all models.
"""

from sqlalchemy import DECIMAL

# Standard money type for amounts, earnings, commissions, withdrawals
# Precision: 12 digits total, 2 after decimal point
# Range: up to 9,999,999,999.99
MoneyType = DECIMAL(12, 2)

# Standard percentage type for commission and fee rates
# Precision: 5 digits total, 2 after decimal point
# Range: 0.00 to 999.99 (constrained to 0-100 where used)
PercentType = DECIMAL(5, 2)
