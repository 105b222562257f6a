"""
Referral query module.

Read-only views of an account's upline and downline.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.business_constants import REFERRAL_DEPTH
from investnet.models.account import Account
from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.referral_repository import ReferralRepository
from investnet.utils.exceptions import ValidationError


class ReferralQueryManager:
    """Handles referral queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize query manager."""
        self.session = session
        self.account_repo = AccountRepository(session)
        self.referral_repo = ReferralRepository(session)

    async def get_ancestors(self, account_id: int) -> list[tuple[int, Account]]:
        """
        Get the account's upline.

        Args:
            account_id: Descendant account ID

        Returns:
            List of (level, ancestor) from level 1 upwards
        """
        edges = await self.referral_repo.get_ancestor_edges(account_id)
        ancestors = []
        for edge in edges:
            ancestor = await self.account_repo.get_by_id(edge.ancestor_id)
            if ancestor is not None:
                ancestors.append((edge.level, ancestor))
        return ancestors

    async def get_downline_by_level(self, account_id: int, level: int) -> list[Account]:
        """
        Get accounts at one level below the account.

        Raises:
            ValidationError: If level is outside 1..10
        """
        if not 1 <= level <= REFERRAL_DEPTH:
            raise ValidationError(
                f"Level must be between 1 and {REFERRAL_DEPTH}", "INVALID_LEVEL"
            )
        return await self.referral_repo.get_downline_by_level(account_id, level)

    async def get_referral_stats(self, account_id: int) -> dict[str, Any]:
        """
        Get downline size and commission earned per level.

        Args:
            account_id: Ancestor account ID

        Returns:
            Dict with "levels" mapping level to {"count", "commission"},
            plus "total_referrals" and "total_commission"
        """
        counts = await self.referral_repo.get_level_counts(account_id)
        totals = await self.referral_repo.get_commission_totals(account_id)

        levels = {
            level: {"count": counts[level], "commission": totals[level]}
            for level in range(1, REFERRAL_DEPTH + 1)
        }

        return {
            "levels": levels,
            "total_referrals": sum(counts.values()),
            "total_commission": sum(totals.values(), Decimal("0")),
        }
