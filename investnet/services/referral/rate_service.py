"""
Commission rate service.

Admin maintenance of the per-level commission table and snapshot loading
for the fan-out engine.
"""

from decimal import Decimal, InvalidOperation

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.business_constants import REFERRAL_DEPTH
from investnet.models.commission_rate import CommissionRate
from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.commission_repository import CommissionRateRepository
from investnet.services.referral.config import CommissionRateSnapshot
from investnet.utils.db_decorators import with_auto_commit
from investnet.utils.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


class CommissionRateService:
    """Reads and updates the commission rate table."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize rate service."""
        self.session = session
        self.rate_repo = CommissionRateRepository(session)
        self.account_repo = AccountRepository(session)

    async def get_snapshot(self) -> CommissionRateSnapshot:
        """
        Load current rates as an immutable snapshot.

        Returns:
            Snapshot with stored rates, defaults for missing levels
        """
        return CommissionRateSnapshot(rates=await self.rate_repo.get_all_rates())

    @with_auto_commit
    async def set_rate(
        self, level: int, rate: Decimal | str, admin_id: int
    ) -> CommissionRate:
        """
        Change the commission percentage of one level.

        Args:
            level: Referral level (1-10)
            rate: Percentage between 0 and 100
            admin_id: Acting administrator

        Returns:
            Updated rate row

        Raises:
            PermissionDeniedError: If caller is not an admin
            ValidationError: If level or rate is out of range
        """
        admin = await self.account_repo.get_by_id(admin_id)
        if admin is None:
            raise NotFoundError(f"Account {admin_id} not found")
        if not admin.is_admin:
            raise PermissionDeniedError("Only administrators can change rates")

        if not 1 <= level <= REFERRAL_DEPTH:
            raise ValidationError(
                f"Level must be between 1 and {REFERRAL_DEPTH}", "INVALID_LEVEL"
            )

        if isinstance(rate, float):
            raise ValidationError("Rate must not be a float", "INVALID_RATE")
        try:
            value = Decimal(str(rate).strip())
        except InvalidOperation as e:
            raise ValidationError("Rate is not a number", "INVALID_RATE") from e
        if not value.is_finite() or not Decimal("0") <= value <= Decimal("100"):
            raise ValidationError("Rate must be between 0 and 100", "INVALID_RATE")

        row = await self.rate_repo.upsert_rate(level, value)

        logger.info(
            "Commission rate updated",
            extra={"level": level, "rate": str(value), "admin_id": admin_id},
        )

        return row
