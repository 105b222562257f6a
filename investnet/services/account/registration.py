"""
Account registration functionality.

Creates accounts with a unique referral code and attaches them to their
inviter's chain. Referral problems never block a registration.
"""

import hashlib
import secrets

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.business_constants import (
    REFERRAL_CODE_LENGTH,
    REFERRAL_CODE_MAX_ATTEMPTS,
    REFERRAL_CODE_PREFIX,
    Role,
)
from investnet.models.account import Account
from investnet.repositories.account_repository import AccountRepository
from investnet.services.referral.chain_manager import (
    ReferralChainManager,
    normalize_referral_code,
)
from investnet.utils.exceptions import (
    CapacityError,
    NotFoundError,
    ValidationError,
)


def generate_referral_code() -> str:
    """Generate a candidate code: prefix plus upper-case hex digest chars."""
    digest = hashlib.md5(secrets.token_bytes(16)).hexdigest()
    return REFERRAL_CODE_PREFIX + digest[:REFERRAL_CODE_LENGTH].upper()


class AccountRegistrationService:
    """Registers accounts and builds their referral chain."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize registration service."""
        self.session = session
        self.account_repo = AccountRepository(session)
        self.chain_manager = ReferralChainManager(session)

    async def _unique_referral_code(self) -> str:
        for _ in range(REFERRAL_CODE_MAX_ATTEMPTS):
            code = generate_referral_code()
            if not await self.account_repo.referral_code_exists(code):
                return code

        raise ValidationError(
            "Could not generate a unique referral code", "REFERRAL_CODE_EXHAUSTED"
        )

    async def register_account(
        self,
        account_id: int | None = None,
        full_name: str = "",
        referrer_code: str | None = None,
        role: str = Role.AGENT,
    ) -> Account:
        """
        Register new account with optional inviter.

        Args:
            account_id: Identity supplied by the authentication layer
                (autoincrement when omitted)
            full_name: Display name
            referrer_code: Inviter's referral code (optional)
            role: Account role (agent or admin)

        Returns:
            Created account carrying its new referral code

        Raises:
            ValidationError: If role is unknown or no unique code is found
            IntegrityError: If account_id is already registered
        """
        if role not in (Role.AGENT, Role.ADMIN):
            raise ValidationError(f"Unknown role: {role}", "INVALID_ROLE")

        inviter_code = normalize_referral_code(referrer_code)

        try:
            data = {
                "full_name": full_name,
                "role": role,
                "referral_code": await self._unique_referral_code(),
                "referrer_code": inviter_code,
            }
            if account_id is not None:
                data["id"] = account_id
            account = await self.account_repo.create(**data)

            edges = 0
            if inviter_code:
                try:
                    edges = await self.chain_manager.attach_to_inviter(
                        account, inviter_code
                    )
                except (CapacityError, NotFoundError, ValidationError) as e:
                    logger.warning(
                        "Referral skipped during registration",
                        extra={
                            "account_id": account.id,
                            "referrer_code": inviter_code,
                            "reason": e.code,
                        },
                    )

            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Account registered",
            extra={
                "account_id": account.id,
                "referral_code": account.referral_code,
                "referral_levels": edges,
            },
        )

        return account
