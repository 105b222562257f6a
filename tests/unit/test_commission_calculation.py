"""
Unit tests for commission and payout arithmetic.

Tests cover:
- Default per-level commission rates
- Rate snapshot immutability
- Commission rounding on the principal basis
- Monthly ROI amount and payout dates
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from investnet.config.business_constants import PAYOUT_COUNT
from investnet.services.investment.payout.scheduler import (
    calculate_monthly_payout,
    payout_dates,
)
from investnet.services.referral.commission_processor import calculate_commission
from investnet.services.referral.config import CommissionRateSnapshot


class TestCommissionRateSnapshot:
    """Test rate snapshot behaviour."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            (1, Decimal("10.00")),
            (2, Decimal("8.00")),
            (3, Decimal("6.00")),
            (4, Decimal("4.00")),
            (5, Decimal("2.00")),
            (10, Decimal("2.00")),
        ],
    )
    def test_default_rates(self, level, expected):
        assert CommissionRateSnapshot().rate_for(level) == expected

    @pytest.mark.parametrize("level", [0, 11, -1])
    def test_out_of_range_level_has_no_rate(self, level):
        assert CommissionRateSnapshot().rate_for(level) == Decimal("0")

    def test_stored_rates_override_defaults(self):
        snapshot = CommissionRateSnapshot(rates={1: Decimal("12.50")})
        assert snapshot.rate_for(1) == Decimal("12.50")
        assert snapshot.rate_for(2) == Decimal("8.00")

    def test_snapshot_is_read_only(self):
        source = {1: Decimal("10.00")}
        snapshot = CommissionRateSnapshot(rates=source)

        with pytest.raises(TypeError):
            snapshot.rates[1] = Decimal("50")

        source[1] = Decimal("50")
        assert snapshot.rate_for(1) == Decimal("10.00")


class TestCalculateCommission:
    """Test commission amounts."""

    def test_level_one_on_ten_thousand(self):
        assert calculate_commission(Decimal("10000"), Decimal("10")) == Decimal("1000.00")

    def test_level_two_on_ten_thousand(self):
        assert calculate_commission(Decimal("10000"), Decimal("8")) == Decimal("800.00")

    def test_rounds_half_up(self):
        # 333.33 * 2% = 6.6666
        assert calculate_commission(Decimal("333.33"), Decimal("2")) == Decimal("6.67")

    def test_zero_rate(self):
        assert calculate_commission(Decimal("5000"), Decimal("0")) == Decimal("0.00")


class TestPayoutSchedule:
    """Test monthly ROI arithmetic."""

    def test_monthly_payout_is_five_percent(self):
        assert calculate_monthly_payout(Decimal("10000")) == Decimal("500.00")

    def test_monthly_payout_rounding(self):
        assert calculate_monthly_payout(Decimal("123.45")) == Decimal("6.17")

    def test_forty_dates(self):
        dates = payout_dates(datetime(2026, 10, 17, 14, 0, tzinfo=UTC))
        assert len(dates) == PAYOUT_COUNT

    def test_first_payout_next_month_start(self):
        dates = payout_dates(datetime(2026, 10, 17, 14, 0, tzinfo=UTC))
        assert dates[0] == datetime(2026, 11, 1, tzinfo=UTC)
        assert dates[-1] == datetime(2030, 2, 1, tzinfo=UTC)

    def test_dates_are_distinct_and_ascending(self):
        dates = payout_dates(datetime(2026, 1, 31, tzinfo=UTC))
        assert dates == sorted(set(dates))
