"""Decimal helpers for two-decimal money amounts."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from investnet.config.business_constants import MONEY_QUANT
from investnet.utils.exceptions import ValidationError


def quantize_money(value: Decimal) -> Decimal:
    """Round to two decimal places, half up."""
    return value.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def parse_amount(value: Decimal | int | str, field: str = "amount") -> Decimal:
    """
    Parse and validate a strictly positive money amount.

    Args:
        value: Raw amount (Decimal, int or numeric string)
        field: Field name used in error messages

    Returns:
        Amount as Decimal

    Raises:
        ValidationError: If not numeric, not finite, not positive or
            has more than two decimal places
    """
    if isinstance(value, float):
        raise ValidationError(f"{field} must not be a float", "INVALID_AMOUNT")

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field} is not a number", "INVALID_AMOUNT") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be finite", "INVALID_AMOUNT")

    if amount <= 0:
        raise ValidationError(f"{field} must be positive", "INVALID_AMOUNT")

    if amount != amount.quantize(MONEY_QUANT):
        raise ValidationError(
            f"{field} must have at most two decimal places", "INVALID_AMOUNT"
        )

    return amount
