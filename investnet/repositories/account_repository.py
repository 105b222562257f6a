"""
Account repository.

Data access layer for Account model.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.business_constants import MAX_DIRECT_REFERRALS
from investnet.models.account import Account
from investnet.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Account repository with referral-cap and activation primitives."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize account repository."""
        super().__init__(Account, session)

    async def get_by_referral_code(self, referral_code: str) -> Account | None:
        """
        Get account by referral code.

        Args:
            referral_code: Normalized (upper-case) referral code

        Returns:
            Account or None
        """
        return await self.get_by(referral_code=referral_code)

    async def referral_code_exists(self, referral_code: str) -> bool:
        """Check whether a referral code is already taken."""
        return await self.exists(referral_code=referral_code)

    async def increment_direct_referrals_if_below_cap(self, account_id: int) -> bool:
        """
        Take one direct-referral slot of an inviter.

        The increment and the cap check are a single UPDATE, so two
        concurrent signups cannot both take the last slot.

        Args:
            account_id: Inviter account ID

        Returns:
            True if a slot was taken, False if the inviter is at the cap
        """
        updated = await self.update_where(
            [
                Account.id == account_id,
                Account.direct_referrals < MAX_DIRECT_REFERRALS,
            ],
            direct_referrals=Account.direct_referrals + 1,
        )
        return updated == 1

    async def claim_first_activation(
        self, account_id: int, investment_id: int, activated_at: datetime
    ) -> bool:
        """
        Record the account's first activated investment.

        Compare-and-set on ``first_activation_at IS NULL``; only the first
        caller ever wins.

        Args:
            account_id: Owner account ID
            investment_id: Investment being activated
            activated_at: Activation timestamp

        Returns:
            True if this investment is the owner's first activation
        """
        updated = await self.update_where(
            [
                Account.id == account_id,
                Account.first_activation_at.is_(None),
            ],
            first_activation_at=activated_at,
            first_investment_id=investment_id,
        )
        return updated == 1
