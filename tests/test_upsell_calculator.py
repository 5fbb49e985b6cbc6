"""
Unit Tests for Upsell Calculator

Tests verify the monthly increase of adding one more Premium or Extra line.
"""

import pytest
from decimal import Decimal
from rerate_engine.calculators.upsell import UpsellCalculator
from rerate_engine.models import AccountConfig, Bill, Line
from rerate_engine.regimes import compute_upsell_deltas, reprice_roster


def _priced_bill(*lines, **config):
    bill = Bill(config=AccountConfig(carrier="AT&T", **config), lines=tuple(lines))
    return reprice_roster(bill)


class TestUpsellDeltas:
    """Hypothetical (N+1)-line roster against the current total."""

    @pytest.fixture
    def calculator(self):
        return UpsellCalculator()

    def test_single_premium_line(self, calculator):
        bill = _priced_bill(Line(label="Premium"))
        result = calculator.calculate(bill)

        # Existing Premium drops to 75.99 at 2 lines; new line adds 75.99 / 65.99
        assert result.premium_delta == Decimal('65.99')
        assert result.extra_delta == Decimal('55.99')

    def test_with_family_discount(self, calculator):
        bill = _priced_bill(Line(label="FirstNet"), Line(label="Premium"))
        assert bill.total_per_month == Decimal('107.48')

        result = calculator.calculate(bill)

        # FirstNet 42.99 + Premium 56.99 + new line, minus 107.48
        assert result.premium_delta == Decimal('49.49')
        assert result.extra_delta == Decimal('41.99')

    def test_with_stacked_discounts(self, calculator):
        bill = _priced_bill(Line(label="Extra"), discount_25_eligible=True)
        assert bill.total_per_month == Decimal('56.99')

        result = calculator.calculate(bill)

        # At 2 lines: Extra 65.99 -> 49.49 each; Premium 75.99 -> 56.99
        assert result.extra_delta == Decimal('41.99')
        assert result.premium_delta == Decimal('49.49')

    def test_at_top_tier_only_the_new_line_adds(self, calculator):
        bill = _priced_bill(*[Line(label="Extra") for _ in range(4)])
        result = calculator.calculate(bill)

        assert result.premium_delta == Decimal('50.99')
        assert result.extra_delta == Decimal('40.99')

    def test_measured_against_manual_prices(self, calculator):
        bill = Bill(
            config=AccountConfig(carrier="AT&T"),
            lines=(Line(label="Premium", price_per_month=Decimal('80.00')),),
        )
        result = calculator.calculate(bill)

        # 75.99 + 75.99 - 80.00
        assert result.premium_delta == Decimal('71.98')

    def test_data_devices_carry_into_hypothetical_total(self, calculator):
        bill = _priced_bill(Line(label="Premium"), Line(label="Tablet", is_data_device=True))
        result = calculator.calculate(bill)

        # Tablet stays at 20 so it cancels out
        assert result.premium_delta == Decimal('65.99')

    def test_internet_price_reported(self, calculator):
        bill = _priced_bill(Line(label="Premium"), aia_eligible=True)
        assert calculator.calculate(bill).internet_monthly_price == Decimal('47')

    def test_deltas_have_two_decimal_places(self, calculator):
        bill = _priced_bill(Line(label="FirstNet", is_hotspot_add_on=True), Line(label="Legacy"))
        result = calculator.calculate(bill)
        assert result.premium_delta.as_tuple().exponent == -2
        assert result.extra_delta.as_tuple().exponent == -2


class TestUpsellByRegime:
    """Deltas only exist for the primary carrier."""

    def test_primary_carrier_has_deltas(self):
        bill = _priced_bill(Line(label="Premium"))
        assert compute_upsell_deltas(bill).available

    def test_other_carrier_has_none(self):
        bill = Bill(config=AccountConfig(carrier="Spectrum"), lines=(Line(label="Premium"),))
        result = compute_upsell_deltas(bill)
        assert result.premium_delta is None
        assert result.extra_delta is None
        assert not result.available

    def test_unset_carrier_has_none(self):
        assert not compute_upsell_deltas(Bill()).available
