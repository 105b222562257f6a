"""
Earning model.

One scheduled monthly ROI payout for an active investment. Rows are
generated once at activation; settlement flips status to paid.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from investnet.models.base import Base
from investnet.models.enums import EarningStatus, sql_in
from investnet.models.types import MoneyType


if TYPE_CHECKING:
    from investnet.models.investment import Investment


class Earning(Base):
    """Scheduled ROI payout."""

    __tablename__ = "earnings"
    __table_args__ = (
        UniqueConstraint("investment_id", "payout_date"),
        CheckConstraint("amount > 0", name="amount_positive"),
        CheckConstraint(
            f"status IN ({sql_in(EarningStatus)})",
            name="status_valid",
        ),
        Index("idx_earnings_owner_status", "owner_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    investment_id: Mapped[int] = mapped_column(
        ForeignKey("investments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    payout_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EarningStatus.PENDING.value
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )

    investment: Mapped["Investment"] = relationship(
        "Investment", back_populates="earnings"
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Earning(id={self.id}, investment_id={self.investment_id}, "
            f"amount={self.amount}, payout_date={self.payout_date}, "
            f"status={self.status})>"
        )
