"""
Investment model.

Represents a fixed-sum investment moving through the approval
state machine: pending_proof -> pending_approval -> active/rejected,
active -> completed, and owner cancellation before a decision.
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
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from investnet.models.base import Base
from investnet.models.enums import InvestmentStatus, sql_in
from investnet.models.types import MoneyType


if TYPE_CHECKING:
    from investnet.models.account import Account
    from investnet.models.earning import Earning
    from investnet.models.payment_proof import PaymentProof


class Investment(Base):
    """Investment model - owner deposits awaiting or earning ROI."""

    __tablename__ = "investments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="amount_positive"),
        CheckConstraint(
            f"status IN ({sql_in(InvestmentStatus)})",
            name="status_valid",
        ),
        Index("idx_investments_status_end_date", "status", "end_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=InvestmentStatus.PENDING_PROOF.value,
        index=True,
    )

    # Term (set on approval)
    start_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Admin decision
    decided_by: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True
    )
    decided_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    owner: Mapped["Account"] = relationship(
        "Account",
        back_populates="investments",
        foreign_keys=[owner_id],
    )
    earnings: Mapped[list["Earning"]] = relationship(
        "Earning",
        back_populates="investment",
        cascade="all, delete-orphan",
    )
    payment_proofs: Mapped[list["PaymentProof"]] = relationship(
        "PaymentProof",
        back_populates="investment",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Investment(id={self.id}, owner_id={self.owner_id}, "
            f"amount={self.amount}, status={self.status})>"
        )

    @property
    def is_active(self) -> bool:
        """Check if investment is earning ROI."""
        return self.status == InvestmentStatus.ACTIVE

    @property
    def is_terminal(self) -> bool:
        """Check if no further transitions are possible."""
        return self.status in (
            InvestmentStatus.COMPLETED,
            InvestmentStatus.REJECTED,
            InvestmentStatus.CANCELLED,
        )
