"""Status enumerations shared by models and services."""

from enum import StrEnum


class InvestmentStatus(StrEnum):
    """Investment lifecycle states."""

    PENDING_PROOF = "pending_proof"  # Created, waiting for payment proof
    PENDING_APPROVAL = "pending_approval"  # Proof submitted, waiting for admin
    ACTIVE = "active"  # Approved, payout schedule generated
    COMPLETED = "completed"  # Term elapsed
    REJECTED = "rejected"  # Admin rejected (terminal)
    CANCELLED = "cancelled"  # Owner cancelled before decision (terminal)


class PaymentProofStatus(StrEnum):
    """Payment proof review states."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EarningStatus(StrEnum):
    """Scheduled ROI payout states."""

    PENDING = "pending"
    PAID = "paid"


class WithdrawalStatus(StrEnum):
    """Withdrawal request states."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


def sql_in(enum_cls: type[StrEnum]) -> str:
    """Render enum values as a SQL IN list for check constraints."""
    return ", ".join(f"'{member.value}'" for member in enum_cls)
