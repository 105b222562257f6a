"""
Investment creator module.

Handles investment creation with amount validation.
"""

from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.enums import InvestmentStatus
from investnet.models.investment import Investment
from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.investment_repository import InvestmentRepository
from investnet.services.investment.payout.scheduler import calculate_monthly_payout
from investnet.utils.exceptions import NotFoundError, ValidationError
from investnet.utils.money import parse_amount


class InvestmentCreator:
    """Creates investments in the pending_proof state."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize investment creator."""
        self.session = session
        self.investment_repo = InvestmentRepository(session)
        self.account_repo = AccountRepository(session)

    async def create_investment(
        self, owner_id: int, amount: Decimal | int | str
    ) -> Investment:
        """
        Create investment.

        Args:
            owner_id: Owner account ID
            amount: Principal (positive, at most two decimals)

        Returns:
            Created investment

        Raises:
            ValidationError: If amount is invalid or too small to earn a
                non-zero monthly payout
            NotFoundError: If owner does not exist
        """
        value = parse_amount(amount)
        if calculate_monthly_payout(value) <= 0:
            raise ValidationError(
                f"Amount {value} is too small to earn a monthly payout",
                "AMOUNT_TOO_SMALL",
            )

        try:
            if await self.account_repo.get_by_id(owner_id) is None:
                raise NotFoundError(f"Account {owner_id} not found")

            investment = await self.investment_repo.create(
                owner_id=owner_id,
                amount=value,
                status=InvestmentStatus.PENDING_PROOF.value,
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Investment created",
            extra={
                "investment_id": investment.id,
                "owner_id": owner_id,
                "amount": str(value),
            },
        )

        return investment
