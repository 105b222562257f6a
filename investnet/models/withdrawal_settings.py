"""
WithdrawalSettings model.

Singleton row with withdrawal limits and fee configuration.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from investnet.config.business_constants import (
    DEFAULT_MAX_WITHDRAWAL_AMOUNT,
    DEFAULT_MIN_BALANCE_REQUIRED,
    DEFAULT_MIN_WITHDRAWAL_AMOUNT,
    DEFAULT_PROCESSING_TIME_HOURS,
    DEFAULT_WITHDRAWAL_FEE_PERCENT,
)
from investnet.models.base import Base
from investnet.models.types import MoneyType, PercentType


class WithdrawalSettings(Base):
    """Withdrawal configuration (single row, id = 1)."""

    __tablename__ = "withdrawal_settings"
    __table_args__ = (
        CheckConstraint("min_withdrawal_amount > 0", name="min_positive"),
        CheckConstraint(
            "max_withdrawal_amount >= min_withdrawal_amount",
            name="max_not_below_min",
        ),
        CheckConstraint(
            "withdrawal_fee_percent >= 0 AND withdrawal_fee_percent < 100",
            name="fee_range",
        ),
        CheckConstraint("min_balance_required >= 0", name="floor_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)

    min_withdrawal_amount: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=DEFAULT_MIN_WITHDRAWAL_AMOUNT
    )
    max_withdrawal_amount: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=DEFAULT_MAX_WITHDRAWAL_AMOUNT
    )
    processing_time_hours: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_PROCESSING_TIME_HOURS
    )
    withdrawal_fee_percent: Mapped[Decimal] = mapped_column(
        PercentType, nullable=False, default=DEFAULT_WITHDRAWAL_FEE_PERCENT
    )
    min_balance_required: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=DEFAULT_MIN_BALANCE_REQUIRED
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<WithdrawalSettings(min={self.min_withdrawal_amount}, "
            f"max={self.max_withdrawal_amount}, "
            f"fee={self.withdrawal_fee_percent}%)>"
        )
