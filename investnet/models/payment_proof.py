"""
PaymentProof model.

Stores the opaque file reference an owner submits as proof of payment
for an investment. Its status follows the admin decision.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from investnet.models.base import Base
from investnet.models.enums import PaymentProofStatus, sql_in


if TYPE_CHECKING:
    from investnet.models.investment import Investment


class PaymentProof(Base):
    """Payment proof attached to an investment."""

    __tablename__ = "payment_proofs"
    __table_args__ = (
        CheckConstraint(
            f"status IN ({sql_in(PaymentProofStatus)})",
            name="status_valid",
        ),
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

    file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    file_type: Mapped[str] = mapped_column(String(100), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PaymentProofStatus.PENDING.value
    )
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    investment: Mapped["Investment"] = relationship(
        "Investment", back_populates="payment_proofs"
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<PaymentProof(id={self.id}, investment_id={self.investment_id}, "
            f"status={self.status})>"
        )
