"""
Withdrawal model.

Owner's request to move available balance to a verified bank account.
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
from investnet.models.enums import WithdrawalStatus, sql_in
from investnet.models.types import MoneyType


if TYPE_CHECKING:
    from investnet.models.bank_details import BankDetails


class Withdrawal(Base):
    """Withdrawal request."""

    __tablename__ = "withdrawals"
    __table_args__ = (
        CheckConstraint("amount > 0", name="amount_positive"),
        CheckConstraint("fee_amount >= 0", name="fee_non_negative"),
        CheckConstraint(
            f"status IN ({sql_in(WithdrawalStatus)})",
            name="status_valid",
        ),
        Index("idx_withdrawals_owner_status", "owner_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bank_details_id: Mapped[int] = mapped_column(
        ForeignKey("bank_details.id"), nullable=False
    )

    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    fee_amount: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=Decimal("0")
    )
    net_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=WithdrawalStatus.PENDING.value,
        index=True,
    )

    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    processed_by: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True
    )
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    bank_details: Mapped["BankDetails"] = relationship("BankDetails")

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Withdrawal(id={self.id}, owner_id={self.owner_id}, "
            f"amount={self.amount}, status={self.status})>"
        )
