"""
Investment decision module.

Admin approval or rejection of a pending_approval investment. Approval
activates the investment, generates its payout schedule, records the
owner's first activation and fans out referral commissions, all in one
transaction.
"""

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.business_constants import INVESTMENT_TERM_MONTHS
from investnet.models.enums import InvestmentStatus, PaymentProofStatus
from investnet.models.investment import Investment
from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.investment_repository import InvestmentRepository
from investnet.repositories.payment_proof_repository import PaymentProofRepository
from investnet.services.investment.payout.scheduler import PayoutScheduler
from investnet.services.referral.commission_processor import CommissionProcessor
from investnet.utils.datetime_utils import add_months, utc_now
from investnet.utils.exceptions import (
    IntegrityViolation,
    NotFoundError,
    PermissionDeniedError,
    StateConflictError,
)


class InvestmentDecisionHandler:
    """Applies admin decisions to investments."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize decision handler."""
        self.session = session
        self.investment_repo = InvestmentRepository(session)
        self.account_repo = AccountRepository(session)
        self.proof_repo = PaymentProofRepository(session)
        self.scheduler = PayoutScheduler(session)
        self.commission_processor = CommissionProcessor(session)

    async def _require_admin(self, admin_id: int) -> None:
        admin = await self.account_repo.get_by_id(admin_id)
        if admin is None or not admin.is_admin:
            raise PermissionDeniedError("Only administrators can decide investments")

    async def decide(
        self,
        investment_id: int,
        admin_id: int,
        approved: bool,
        notes: str | None = None,
    ) -> Investment:
        """
        Approve or reject an investment.

        Args:
            investment_id: Investment ID
            admin_id: Deciding administrator
            approved: True to activate, False to reject
            notes: Optional admin notes

        Returns:
            Investment in its new state

        Raises:
            PermissionDeniedError: If caller is not an admin
            NotFoundError: If investment does not exist
            StateConflictError: If investment is not pending_approval,
                including when a concurrent decision won
            IntegrityViolation: If activation would duplicate ledger rows
        """
        try:
            await self._require_admin(admin_id)

            investment = await self.investment_repo.get_by_id(investment_id)
            if investment is None:
                raise NotFoundError(f"Investment {investment_id} not found")

            if approved:
                await self._approve(investment, admin_id, notes)
            else:
                await self._reject(investment, admin_id, notes)

            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.error(
                "Investment decision violated a ledger constraint",
                extra={"investment_id": investment_id, "error": str(e.orig)},
            )
            raise IntegrityViolation(
                f"Investment {investment_id} activation conflicts with existing records"
            ) from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Investment decided",
            extra={
                "investment_id": investment_id,
                "admin_id": admin_id,
                "status": investment.status,
            },
        )

        return investment

    async def _approve(
        self, investment: Investment, admin_id: int, notes: str | None
    ) -> None:
        now = utc_now()
        moved = await self.investment_repo.transition(
            investment.id,
            [InvestmentStatus.PENDING_APPROVAL],
            InvestmentStatus.ACTIVE,
            start_date=now,
            end_date=add_months(now, INVESTMENT_TERM_MONTHS),
            decided_by=admin_id,
            decided_at=now,
            admin_notes=notes,
        )
        if not moved:
            raise StateConflictError(
                f"Investment {investment.id} is not awaiting approval"
            )
        await self.session.refresh(investment)

        await self.proof_repo.resolve_pending(
            investment.id, PaymentProofStatus.APPROVED, notes
        )
        await self.scheduler.generate_schedule(investment)

        first = await self.account_repo.claim_first_activation(
            investment.owner_id, investment.id, now
        )
        if first:
            await self.commission_processor.distribute_commission(investment)

    async def _reject(
        self, investment: Investment, admin_id: int, notes: str | None
    ) -> None:
        now = utc_now()
        moved = await self.investment_repo.transition(
            investment.id,
            [InvestmentStatus.PENDING_APPROVAL],
            InvestmentStatus.REJECTED,
            decided_by=admin_id,
            decided_at=now,
            admin_notes=notes,
        )
        if not moved:
            raise StateConflictError(
                f"Investment {investment.id} is not awaiting approval"
            )
        await self.session.refresh(investment)

        await self.proof_repo.resolve_pending(
            investment.id, PaymentProofStatus.REJECTED, notes
        )
