"""
Payment proof repository.

Data access layer for PaymentProof model.
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.enums import PaymentProofStatus
from investnet.models.payment_proof import PaymentProof
from investnet.repositories.base import BaseRepository


class PaymentProofRepository(BaseRepository[PaymentProof]):
    """Payment proof repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize payment proof repository."""
        super().__init__(PaymentProof, session)

    async def get_latest_for_investment(self, investment_id: int) -> PaymentProof | None:
        """Get the most recently submitted proof of an investment."""
        stmt = (
            select(PaymentProof)
            .where(PaymentProof.investment_id == investment_id)
            .order_by(PaymentProof.created_at.desc(), PaymentProof.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def resolve_pending(
        self,
        investment_id: int,
        status: PaymentProofStatus,
        admin_notes: str | None = None,
    ) -> int:
        """
        Apply an admin decision to the investment's pending proofs.

        Args:
            investment_id: Investment ID
            status: approved or rejected
            admin_notes: Optional reviewer notes

        Returns:
            Number of proofs updated
        """
        stmt = (
            update(PaymentProof)
            .where(
                PaymentProof.investment_id == investment_id,
                PaymentProof.status == PaymentProofStatus.PENDING.value,
            )
            .values(status=status.value, admin_notes=admin_notes)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0
