"""
Account model.

Represents a registered platform participant (investor or admin).
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from investnet.config.business_constants import MAX_DIRECT_REFERRALS, Role
from investnet.models.base import Base


if TYPE_CHECKING:
    from investnet.models.investment import Investment


class Account(Base):
    """Account model - registered participants."""

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint(
            f"direct_referrals >= 0 AND direct_referrals <= {MAX_DIRECT_REFERRALS}",
            name="direct_referrals_range",
        ),
        CheckConstraint(
            f"role IN ('{Role.ADMIN}', '{Role.AGENT}')",
            name="role_valid",
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    full_name: Mapped[str] = mapped_column(
        String(255), nullable=False, default=""
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Role.AGENT
    )

    # Referral
    referral_code: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, index=True
    )
    referrer_code: Mapped[str | None] = mapped_column(
        String(20), nullable=True, index=True
    )
    direct_referrals: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    # First activated investment (set once, never changed afterwards)
    first_activation_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    first_investment_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )

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
    investments: Mapped[list["Investment"]] = relationship(
        "Investment",
        back_populates="owner",
        foreign_keys="Investment.owner_id",
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Account(id={self.id}, referral_code={self.referral_code}, "
            f"direct_referrals={self.direct_referrals})>"
        )

    @property
    def is_admin(self) -> bool:
        """Whether account has the admin role."""
        return self.role == Role.ADMIN

    @property
    def has_referral_slots(self) -> bool:
        """Whether account can still invite direct referrals."""
        return self.direct_referrals < MAX_DIRECT_REFERRALS
