"""
Bank details service.

Owners register a payout destination; administrators verify it.
"""

import re

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.business_constants import IFSC_CODE_PATTERN
from investnet.models.bank_details import BankDetails
from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.withdrawal_repository import BankDetailsRepository
from investnet.utils.datetime_utils import utc_now
from investnet.utils.db_decorators import with_auto_commit
from investnet.utils.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StateConflictError,
    ValidationError,
)

_IFSC_RE = re.compile(IFSC_CODE_PATTERN)


class BankDetailsService:
    """Manages owners' bank details."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.bank_repo = BankDetailsRepository(session)
        self.account_repo = AccountRepository(session)

    @with_auto_commit
    async def save_bank_details(
        self,
        owner_id: int,
        account_holder_name: str,
        account_number: str,
        ifsc_code: str,
        bank_name: str,
        branch_name: str,
    ) -> BankDetails:
        """
        Create or replace an owner's unverified bank details.

        Args:
            owner_id: Owner account ID
            account_holder_name: Name on the bank account
            account_number: Digits only
            ifsc_code: Branch code, normalized to upper case
            bank_name: Bank name
            branch_name: Branch name

        Returns:
            Stored bank details

        Raises:
            ValidationError: If a field is empty or malformed
            NotFoundError: If owner does not exist
            StateConflictError: If details are already verified
        """
        fields = {
            "account_holder_name": account_holder_name.strip(),
            "account_number": account_number.strip(),
            "ifsc_code": ifsc_code.strip().upper(),
            "bank_name": bank_name.strip(),
            "branch_name": branch_name.strip(),
        }
        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise ValidationError(
                f"Missing bank details: {', '.join(missing)}", "INVALID_BANK_DETAILS"
            )
        if not fields["account_number"].isdigit():
            raise ValidationError(
                "Account number must contain digits only", "INVALID_BANK_DETAILS"
            )
        if not _IFSC_RE.match(fields["ifsc_code"]):
            raise ValidationError("Invalid IFSC code", "INVALID_BANK_DETAILS")

        if await self.account_repo.get_by_id(owner_id) is None:
            raise NotFoundError(f"Account {owner_id} not found")

        existing = await self.bank_repo.get_by_owner(owner_id)
        if existing is None:
            details = await self.bank_repo.create(owner_id=owner_id, **fields)
        else:
            if existing.verified:
                raise StateConflictError("Verified bank details cannot be changed")
            for name, value in fields.items():
                setattr(existing, name, value)
            await self.session.flush()
            details = existing

        logger.info("Bank details saved", extra={"owner_id": owner_id})
        return details

    @with_auto_commit
    async def verify_bank_details(
        self, owner_id: int, admin_id: int, notes: str | None = None
    ) -> BankDetails:
        """Mark an owner's bank details as verified (admin only)."""
        admin = await self.account_repo.get_by_id(admin_id)
        if admin is None or not admin.is_admin:
            raise PermissionDeniedError("Only administrators can verify bank details")

        details = await self.bank_repo.get_by_owner(owner_id)
        if details is None:
            raise NotFoundError(f"No bank details for account {owner_id}")

        details.verified = True
        details.verified_at = utc_now()
        details.admin_notes = notes
        await self.session.flush()

        logger.info(
            "Bank details verified",
            extra={"owner_id": owner_id, "admin_id": admin_id},
        )
        return details
