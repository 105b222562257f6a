"""
CommissionRecord model.

One commission paid to an ancestor for a descendant's qualifying
investment at a given level. The 4-tuple unique key makes fan-out
idempotent.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from investnet.config.business_constants import REFERRAL_DEPTH
from investnet.models.base import Base
from investnet.models.types import MoneyType, PercentType


class CommissionRecord(Base):
    """Referral commission ledger entry."""

    __tablename__ = "commission_records"
    __table_args__ = (
        UniqueConstraint("ancestor_id", "descendant_id", "investment_id", "level"),
        CheckConstraint(
            f"level >= 1 AND level <= {REFERRAL_DEPTH}",
            name="level_range",
        ),
        CheckConstraint("commission_amount >= 0", name="amount_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    ancestor_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    descendant_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    investment_id: Mapped[int] = mapped_column(
        ForeignKey("investments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    level: Mapped[int] = mapped_column(Integer, nullable=False)

    base_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    commission_rate: Mapped[Decimal] = mapped_column(PercentType, nullable=False)
    commission_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    earned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<CommissionRecord(ancestor_id={self.ancestor_id}, "
            f"descendant_id={self.descendant_id}, "
            f"investment_id={self.investment_id}, level={self.level}, "
            f"commission_amount={self.commission_amount})>"
        )
