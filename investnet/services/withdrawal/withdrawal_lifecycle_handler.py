"""
Withdrawal lifecycle handling module.

Handles admin status changes of withdrawal requests.
"""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.enums import WithdrawalStatus
from investnet.models.withdrawal import Withdrawal
from investnet.repositories.account_repository import AccountRepository
from investnet.repositories.withdrawal_repository import WithdrawalRepository
from investnet.utils.datetime_utils import utc_now
from investnet.utils.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StateConflictError,
    ValidationError,
)

# Target status -> statuses it may be reached from
ADMIN_TRANSITIONS: dict[WithdrawalStatus, tuple[WithdrawalStatus, ...]] = {
    WithdrawalStatus.PROCESSING: (WithdrawalStatus.PENDING,),
    WithdrawalStatus.COMPLETED: (
        WithdrawalStatus.PENDING,
        WithdrawalStatus.PROCESSING,
    ),
    WithdrawalStatus.REJECTED: (
        WithdrawalStatus.PENDING,
        WithdrawalStatus.PROCESSING,
    ),
}

TERMINAL_ADMIN_STATUSES = (WithdrawalStatus.COMPLETED, WithdrawalStatus.REJECTED)


class WithdrawalLifecycleHandler:
    """Handles withdrawal lifecycle operations."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal lifecycle handler.

        Args:
            session: Database session
        """
        self.session = session
        self.withdrawal_repo = WithdrawalRepository(session)
        self.account_repo = AccountRepository(session)

    async def process_withdrawal(
        self,
        withdrawal_id: int,
        admin_id: int,
        new_status: WithdrawalStatus | str,
        notes: str | None = None,
    ) -> Withdrawal:
        """
        Advance a withdrawal on behalf of an administrator.

        Args:
            withdrawal_id: Withdrawal ID
            admin_id: Acting administrator
            new_status: processing, completed or rejected
            notes: Optional admin notes

        Returns:
            Withdrawal in its new state

        Raises:
            ValidationError: If new_status is not a withdrawal status
            PermissionDeniedError: If caller is not an admin
            NotFoundError: If withdrawal does not exist
            StateConflictError: If the transition is not allowed from the
                current status
        """
        try:
            target = WithdrawalStatus(new_status)
        except ValueError as e:
            raise ValidationError(
                f"Unknown withdrawal status: {new_status}", "INVALID_STATUS"
            ) from e

        try:
            admin = await self.account_repo.get_by_id(admin_id)
            if admin is None or not admin.is_admin:
                raise PermissionDeniedError(
                    "Only administrators can process withdrawals"
                )

            withdrawal = await self.withdrawal_repo.get_by_id(withdrawal_id)
            if withdrawal is None:
                raise NotFoundError(f"Withdrawal {withdrawal_id} not found")

            allowed_from = ADMIN_TRANSITIONS.get(target)
            if allowed_from is None:
                raise StateConflictError(
                    f"Administrators cannot move a withdrawal to {target}"
                )

            values = {"processed_by": admin_id, "admin_notes": notes}
            if target in TERMINAL_ADMIN_STATUSES:
                values["processed_at"] = utc_now()

            moved = await self.withdrawal_repo.transition(
                withdrawal_id, allowed_from, target, **values
            )
            if not moved:
                raise StateConflictError(
                    f"Withdrawal {withdrawal_id} cannot move "
                    f"from {withdrawal.status} to {target}"
                )

            await self.session.refresh(withdrawal)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Withdrawal processed",
            extra={
                "withdrawal_id": withdrawal_id,
                "admin_id": admin_id,
                "status": target.value,
            },
        )

        return withdrawal
