"""
Exception taxonomy.

Defines categorized exception types for the ledger core. Each error
carries a user-facing message and a stable machine-readable code.
"""

from sqlalchemy.exc import IntegrityError, OperationalError


class InvestnetError(Exception):
    """Base class for all ledger core errors."""

    code = "ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(InvestnetError):
    """Bad input rejected before any write (amount, code, bank details)."""

    code = "VALIDATION_ERROR"


class StateConflictError(InvestnetError):
    """Wrong-state transition or a lost concurrent race.

    The caller must re-fetch the current state and must not retry blindly.
    """

    code = "STATE_CONFLICT"


class CapacityError(InvestnetError):
    """Inviter has reached the direct-referral cap."""

    code = "CAPACITY_EXCEEDED"


class IntegrityViolation(InvestnetError):
    """A uniqueness invariant would be broken."""

    code = "INTEGRITY_VIOLATION"


class NotFoundError(InvestnetError):
    """Referenced entity does not exist."""

    code = "NOT_FOUND"


class PermissionDeniedError(InvestnetError):
    """Role or ownership precondition failed."""

    code = "PERMISSION_DENIED"


# Exception categories based on handling strategy

# Surface to the user as actionable messages
USER_ACTIONABLE = (
    ValidationError,
    CapacityError,
    NotFoundError,
    PermissionDeniedError,
)

# Surface as "please retry" after re-fetching state
RETRY_AFTER_REFRESH = (
    StateConflictError,
    IntegrityViolation,
    IntegrityError,
    OperationalError,
)


def is_user_actionable(exc: Exception) -> bool:
    """
    Check if exception carries an actionable message for the user.

    Args:
        exc: Exception to check

    Returns:
        True if the message can be shown as-is
    """
    return isinstance(exc, USER_ACTIONABLE)


def needs_refresh(exc: Exception) -> bool:
    """
    Check if the caller should re-fetch state before trying again.

    Args:
        exc: Exception to check

    Returns:
        True for state conflicts and database-level races
    """
    return isinstance(exc, RETRY_AFTER_REFRESH)
