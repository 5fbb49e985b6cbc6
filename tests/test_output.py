"""
Unit Tests for Output and Export Builders

Tests verify the API response shape and the text of the exported summary.
"""

import pytest
from datetime import datetime
from decimal import Decimal
from rerate_engine.models import (
    AccountConfig,
    AccountHolder,
    AddOnOutcome,
    Bill,
    ExportOutcomes,
    Line,
    LineOutcome,
)
from rerate_engine.output import (
    ExportBuilder,
    bill_to_dict,
    to_money,
)
from rerate_engine.processor import BillProcessor
from rerate_engine.regimes import (
    compute_export_commission_summary,
    compute_upsell_deltas,
    reprice_roster,
)

GENERATED_AT = datetime(2025, 3, 14, 9, 30)


def _export(bill, outcomes=None):
    upsell = compute_upsell_deltas(bill)
    commission = compute_export_commission_summary(bill, upsell)
    return ExportBuilder().build(bill, outcomes or ExportOutcomes(), upsell, commission, GENERATED_AT)


@pytest.fixture
def att_bill():
    bill = Bill(
        config=AccountConfig(carrier="AT&T", aia_eligible=True),
        lines=(Line(customer_name="Ana", label="Premium"), Line(label="Extra")),
        account_holder=AccountHolder(name="Ana Ruiz", phone="555-0100", email="ana@example.com"),
        sales_rep_name="Jordan",
        sales_rep_notes="Wants a tablet\nCall back after payday",
    )
    return reprice_roster(bill)


@pytest.fixture
def verizon_bill():
    return Bill(
        config=AccountConfig(carrier="Verizon", kicker_unlocked=True),
        lines=(
            Line(customer_name="Lee", price_per_month=Decimal('70'),
                 suggested_replacement_plan="Premium", add_on_pro1=True, add_on_htp=True),
            Line(price_per_month=Decimal('45.5'), suggested_replacement_plan="Extra"),
        ),
    )


class TestMoneyFormatting:

    def test_to_money(self):
        assert to_money(Decimal('64.49')) == 64.49
        assert to_money(Decimal('0')) == 0.0


class TestBillSerialization:

    def test_round_trip(self, att_bill):
        assert Bill.from_dict(bill_to_dict(att_bill)) == att_bill

    def test_missing_lines_gives_single_empty_line(self):
        bill = Bill.from_dict({"carrier": "AT&T"})
        assert len(bill.lines) == 1
        assert bill.lines[0].label == ""

    def test_invalid_price_rejected(self):
        with pytest.raises(ValueError, match="Invalid money amount"):
            Bill.from_dict({"lines": [{"price_per_month": "abc"}]})

    @pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity", "sNaN"])
    def test_non_finite_price_rejected(self, price):
        with pytest.raises(ValueError, match="Invalid money amount"):
            Bill.from_dict({"lines": [{"price_per_month": price}]})

    def test_typed_prices_rounded_to_cents(self):
        bill = Bill.from_dict({"lines": [{"price_per_month": "10.005"}, {"price_per_month": 10.004}]})

        assert [line.price_per_month for line in bill.lines] == [Decimal('10.01'), Decimal('10.00')]
        assert bill.lines[0].price_per_month.as_tuple().exponent == -2

    def test_wire_keys_map_to_fields(self):
        bill = Bill.from_dict({
            "aia_eligibility": True,
            "account_holder_email": "pat@example.com",
            "lines": [{"id": "x1", "hotspot": True, "data_device": False, "suggested_replacement": "Extra"}],
        })

        assert bill.config.aia_eligible is True
        assert bill.account_holder.email == "pat@example.com"
        assert bill.lines[0].line_id == "x1"
        assert bill.lines[0].is_hotspot_add_on is True
        assert bill.lines[0].suggested_replacement_plan == "Extra"


class TestOutputBuilder:
    """Shape of the processed-bill response."""

    @pytest.fixture
    def processor(self):
        return BillProcessor()

    def test_primary_carrier_response(self, processor, att_bill):
        output = processor.output_builder.build(processor.process(att_bill))

        assert output["totals"] == {
            "total_per_month": 141.98,
            "billable_line_count": 2,
            "line_count": 2,
            "prices_before_taxes": True,
        }
        assert output["upsell"]["internet_monthly_price"] == 47.0
        assert output["upsell"]["data_device_price_range"] == [10.0, 20.0]
        assert "FirstNet" in output["plan_options"]
        assert output["commission"]["total"] == 43.0

    def test_discount_25_hides_flat_rate_plan(self, processor):
        bill = Bill(config=AccountConfig(carrier="AT&T", discount_25_eligible=True))
        output = processor.output_builder.build(processor.process(bill))
        assert "FirstNet" not in output["plan_options"]

    def test_other_carrier_response(self, processor, verizon_bill):
        output = processor.output_builder.build(processor.process(verizon_bill))

        assert output["totals"]["total_per_month"] == 115.5
        assert output["upsell"]["premium_delta"] is None
        assert "plan_options" not in output
        assert output["commission"]["total"] == 58.0


class TestExportDocument:
    """Text of the exported summary."""

    def test_header_and_filename(self, att_bill):
        document = _export(att_bill)

        assert document.lines[:2] == ["Rerate Assistant - Summary", "Generated: 2025-03-14 09:30"]
        assert document.filename == "rerate-assistant-2025-03-14.pdf"

    def test_sales_rep_and_notes(self, att_bill):
        lines = _export(att_bill).lines
        assert "Sales rep: Jordan" in lines
        notes = lines.index("Notes:")
        assert lines[notes + 1:notes + 3] == ["Wants a tablet", "Call back after payday"]

    def test_account_holder_section(self, att_bill):
        lines = _export(att_bill).lines
        start = lines.index("Account holder")
        assert lines[start - 1] == ""
        assert lines[start + 1:start + 3] == ["Ana Ruiz", "555-0100"]

    def test_bill_information_for_primary_carrier(self, att_bill):
        lines = _export(att_bill).lines
        assert "Carrier: AT&T" in lines
        assert "AIA Eligible: Yes" in lines
        assert "25% Discount Eligible: No" in lines
        assert "Kicker Unlocked: No" in lines

    def test_bill_information_for_other_carrier(self, verizon_bill):
        lines = _export(verizon_bill).lines
        assert "Carrier: Verizon" in lines
        assert not any(line.startswith("25% Discount Eligible") for line in lines)

    def test_phone_lines_primary(self, att_bill):
        lines = _export(att_bill).lines
        assert "Line 1: Ana | Premium | Add-ons: - | $75.99/mo" in lines
        assert "Line 2: - | Extra | Add-ons: - | $65.99/mo" in lines
        assert "Estimated monthly total (lines): $141.98" in lines
        assert "All prices are shown before taxes." in lines

    def test_phone_lines_other_carrier(self, verizon_bill):
        lines = _export(verizon_bill).lines
        assert "Line 1: Lee | Suggest: Premium | Add-ons: Pro 1, HTP | $70.00/mo" in lines

    def test_primary_opportunities(self, att_bill):
        lines = _export(att_bill).lines
        start = lines.index("Opportunities / Commission")

        assert lines[start + 1] == "Estimated total: $141.98"
        assert "Add one more line (Premium): +$30.99/mo - Commission: $15" in lines
        assert "Add one more line (Extra): +$20.99/mo - Commission: $10" in lines
        assert "Add High Speed Internet: +$47.00/mo - Commission: $15" in lines
        assert lines[-1] == "Total potential commission: $40"

    def test_other_carrier_opportunities(self, verizon_bill):
        lines = _export(verizon_bill).lines

        assert "Premium (1): $30" in lines
        assert "Extra (1): $20" in lines
        assert "High Speed Internet: $30" in lines
        assert "Pro 1 (1): $3" in lines
        assert lines[-1] == "Total commission: $88"

    def test_unset_carrier_has_no_commission_rows(self):
        lines = _export(Bill()).lines
        assert lines[-2:] == ["Opportunities / Commission", "Estimated total: $0.00"]


class TestExportOutcomes:
    """Sold / not-sold records in the export."""

    def test_outcomes_rendered_when_complete(self, verizon_bill):
        outcomes = ExportOutcomes(
            lines=(LineOutcome(sold=True), LineOutcome(sold=False, objections="  too expensive ")),
            internet=LineOutcome(sold=False),
            add_ons=(AddOnOutcome(line_index=0, add_on="HTP", sold=True),),
        )
        lines = _export(verizon_bill, outcomes).lines

        assert "Line outcomes (did you sell each line?)" in lines
        assert "Line 1: Lee - Sold" in lines
        assert "Line 2: - - Not sold" in lines
        assert "Objections: too expensive" in lines
        assert "High Speed Internet - Not sold" in lines
        assert "Add-on outcomes (did you sell each add-on?)" in lines
        assert "Line 1: Lee - HTP - Sold" in lines

    def test_partial_outcomes_omitted(self, verizon_bill):
        outcomes = ExportOutcomes(lines=(LineOutcome(sold=True),))
        lines = _export(verizon_bill, outcomes).lines
        assert "Line outcomes (did you sell each line?)" not in lines

    def test_pitched_add_ons(self, verizon_bill):
        assert verizon_bill.pitched_add_ons() == [(0, "Pro 1"), (0, "HTP")]

    def test_outcome_for_unpitched_add_on_rejected(self, verizon_bill):
        outcomes = ExportOutcomes(add_ons=(AddOnOutcome(line_index=1, add_on="HTP", sold=True),))
        with pytest.raises(ValueError, match="not pitched"):
            BillProcessor().export(verizon_bill, outcomes, GENERATED_AT)
