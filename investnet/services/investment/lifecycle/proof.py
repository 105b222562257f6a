"""
Investment proof module.

Stores the owner's payment proof reference and moves the investment
to pending_approval.
"""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.enums import InvestmentStatus, PaymentProofStatus
from investnet.models.payment_proof import PaymentProof
from investnet.repositories.investment_repository import InvestmentRepository
from investnet.repositories.payment_proof_repository import PaymentProofRepository
from investnet.utils.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StateConflictError,
    ValidationError,
)


class InvestmentProofHandler:
    """Handles payment proof submission."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize proof handler."""
        self.session = session
        self.investment_repo = InvestmentRepository(session)
        self.proof_repo = PaymentProofRepository(session)

    async def submit_proof(
        self,
        investment_id: int,
        owner_id: int,
        file_path: str,
        file_type: str,
    ) -> PaymentProof:
        """
        Submit payment proof for a pending_proof investment.

        The file reference is stored as given and never inspected.

        Args:
            investment_id: Investment ID
            owner_id: Submitting account (must own the investment)
            file_path: Opaque storage reference
            file_type: MIME type reported by the uploader

        Returns:
            Created payment proof

        Raises:
            ValidationError: If the reference is empty
            NotFoundError: If investment does not exist
            PermissionDeniedError: If caller is not the owner
            StateConflictError: If investment is not pending_proof
        """
        if not file_path or not file_path.strip():
            raise ValidationError("Proof reference is empty", "INVALID_PROOF")

        try:
            investment = await self.investment_repo.get_by_id(investment_id)
            if investment is None:
                raise NotFoundError(f"Investment {investment_id} not found")
            if investment.owner_id != owner_id:
                raise PermissionDeniedError("Not the owner of this investment")

            moved = await self.investment_repo.transition(
                investment_id,
                [InvestmentStatus.PENDING_PROOF],
                InvestmentStatus.PENDING_APPROVAL,
            )
            if not moved:
                raise StateConflictError(
                    f"Investment {investment_id} is not awaiting proof"
                )

            proof = await self.proof_repo.create(
                investment_id=investment_id,
                owner_id=owner_id,
                file_path=file_path.strip(),
                file_type=file_type,
                status=PaymentProofStatus.PENDING.value,
            )

            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Payment proof submitted",
            extra={"investment_id": investment_id, "proof_id": proof.id},
        )

        return proof
