"""
CommissionRate model.

Per-level commission percentage. Administratively adjustable, read
as an immutable snapshot by the fan-out engine.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from investnet.config.business_constants import REFERRAL_DEPTH
from investnet.models.base import Base
from investnet.models.types import PercentType


class CommissionRate(Base):
    """Commission rate for one referral level."""

    __tablename__ = "commission_rates"
    __table_args__ = (
        CheckConstraint(
            f"level >= 1 AND level <= {REFERRAL_DEPTH}",
            name="level_range",
        ),
        CheckConstraint("rate >= 0 AND rate <= 100", name="rate_range"),
    )

    level: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    rate: Mapped[Decimal] = mapped_column(PercentType, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<CommissionRate(level={self.level}, rate={self.rate})>"
