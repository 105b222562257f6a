"""
Referral chain management module.

Attaches a newly registered account to its inviter's ancestor chain.
"""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.business_constants import MAX_DIRECT_REFERRALS, REFERRAL_DEPTH
from investnet.models.account import Account
from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.referral_repository import ReferralRepository
from investnet.utils.exceptions import CapacityError, NotFoundError, ValidationError


def normalize_referral_code(code: str | None) -> str | None:
    """Trim and upper-case a referral code; empty input means no code."""
    if code is None:
        return None
    normalized = code.strip().upper()
    return normalized or None


class ReferralChainManager:
    """Manages referral chain operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize chain manager."""
        self.session = session
        self.account_repo = AccountRepository(session)
        self.referral_repo = ReferralRepository(session)

    async def get_ancestor_ids(
        self, inviter_id: int, depth: int = REFERRAL_DEPTH
    ) -> list[int]:
        """
        Walk the chain upwards starting at the inviter.

        Each step follows the current ancestor's level-1 edge. The walk is
        iterative and stops at a root account, at ``depth`` ancestors, or
        if an account repeats.

        Args:
            inviter_id: Direct inviter (becomes level 1)
            depth: Maximum number of ancestors

        Returns:
            Ancestor IDs, index 0 is level 1
        """
        chain = [inviter_id]
        current = inviter_id
        while len(chain) < depth:
            parent = await self.referral_repo.get_direct_inviter_id(current)
            if parent is None or parent in chain:
                break
            chain.append(parent)
            current = parent
        return chain

    async def attach_to_inviter(self, account: Account, referrer_code: str) -> int:
        """
        Create referral edges for a new account.

        Takes one of the inviter's direct-referral slots and writes one
        edge per ancestor level. Flushes only; the caller commits.

        Args:
            account: Newly created account
            referrer_code: Inviter's referral code

        Returns:
            Number of edges written

        Raises:
            ValidationError: If the code is empty or refers to the account itself
            NotFoundError: If no account owns the code
            CapacityError: If the inviter already has the maximum of direct referrals
        """
        code = normalize_referral_code(referrer_code)
        if code is None:
            raise ValidationError("Referral code is empty", "INVALID_REFERRAL_CODE")

        inviter = await self.account_repo.get_by_referral_code(code)
        if inviter is None:
            raise NotFoundError(
                f"Referral code {code} not found", "REFERRAL_CODE_NOT_FOUND"
            )

        if inviter.id == account.id:
            raise ValidationError("Cannot refer yourself", "SELF_REFERRAL")

        if not await self.account_repo.increment_direct_referrals_if_below_cap(
            inviter.id
        ):
            raise CapacityError(
                f"Inviter already has {MAX_DIRECT_REFERRALS} direct referrals",
            )

        ancestors = await self.get_ancestor_ids(inviter.id)

        written = 0
        for level, ancestor_id in enumerate(ancestors, start=1):
            if ancestor_id == account.id:
                logger.warning(
                    "Referral loop detected",
                    extra={"account_id": account.id, "chain_ids": ancestors},
                )
                break
            await self.referral_repo.create(
                ancestor_id=ancestor_id,
                descendant_id=account.id,
                level=level,
            )
            written += 1

        logger.info(
            "Referral chain created",
            extra={
                "account_id": account.id,
                "inviter_id": inviter.id,
                "levels_created": written,
            },
        )

        return written
