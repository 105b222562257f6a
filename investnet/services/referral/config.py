"""
Referral system configuration.

Commission rates are stored per level in the database and read as an
immutable snapshot, so one fan-out uses one consistent rate table even
if an admin edits rates concurrently.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

from investnet.config.business_constants import (
    DEFAULT_COMMISSION_RATES,
    REFERRAL_DEPTH,
)


@dataclass(frozen=True)
class CommissionRateSnapshot:
    """Read-only per-level commission percentages."""

    rates: Mapping[int, Decimal] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_COMMISSION_RATES))
    )

    def __post_init__(self) -> None:
        # Levels missing from storage fall back to defaults
        merged = dict(DEFAULT_COMMISSION_RATES)
        merged.update(self.rates)
        object.__setattr__(self, "rates", MappingProxyType(merged))

    def rate_for(self, level: int) -> Decimal:
        """
        Get commission percentage for a level.

        Args:
            level: Referral level (1-10)

        Returns:
            Percentage (e.g. Decimal("10.00") for 10%), 0 outside 1..10
        """
        if not 1 <= level <= REFERRAL_DEPTH:
            return Decimal("0")
        return self.rates.get(level, Decimal("0"))
