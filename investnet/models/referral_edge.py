"""
ReferralEdge model.

One row per (descendant, level): the account's ancestor at that level.
Level 1 is the direct inviter. Rows are written once at registration.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from investnet.config.business_constants import REFERRAL_DEPTH
from investnet.models.base import Base


if TYPE_CHECKING:
    from investnet.models.account import Account


class ReferralEdge(Base):
    """Ancestor/descendant edge of the referral graph."""

    __tablename__ = "referral_edges"
    __table_args__ = (
        UniqueConstraint("descendant_id", "level"),
        CheckConstraint(
            f"level >= 1 AND level <= {REFERRAL_DEPTH}",
            name="level_range",
        ),
        CheckConstraint(
            "ancestor_id <> descendant_id",
            name="no_self_edge",
        ),
        Index("idx_referral_edges_ancestor_level", "ancestor_id", "level"),
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
    level: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )

    # Relationships
    ancestor: Mapped["Account"] = relationship(
        "Account", foreign_keys=[ancestor_id]
    )
    descendant: Mapped["Account"] = relationship(
        "Account", foreign_keys=[descendant_id]
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<ReferralEdge(ancestor_id={self.ancestor_id}, "
            f"descendant_id={self.descendant_id}, level={self.level})>"
        )
