"""
Bill Processor - Main Orchestrator

Coordinates pricing, opportunities and commissions through discrete,
testable steps. Holds no state between calls.
"""

import json
from datetime import datetime
from typing import Any, Dict

from .advisories import collect_advisories
from .calculators import billable_line_count
from .models import (
    ACCOUNT_WIRE_KEYS,
    HOLDER_WIRE_KEYS,
    LINE_WIRE_KEYS,
    Bill,
    BillResult,
    ExportDocument,
    ExportOutcomes,
    to_field_names,
)
from .output import ExportBuilder, OutputBuilder, commission_to_dict
from .regimes import pricing_for
from .roster import apply_event
from .validators import InputValidator

# Event payloads use the same keys as the bill JSON
EVENT_WIRE_KEYS = {
    "update_line": LINE_WIRE_KEYS,
    "update_account": ACCOUNT_WIRE_KEYS,
    "update_details": HOLDER_WIRE_KEYS,
    "set_line_price": {"price_per_month": "price"},
}


class BillProcessor:
    """
    Main orchestrator for bill processing.

    Implements a clear pipeline pattern:
    1. Validate Input
    2. Select Carrier Regime
    3. Reprice Roster
    4. Compute Upsell Deltas
    5. Compute Commission Summary
    6. Collect Advisories
    7. Build Output
    """

    def __init__(self):
        self.validator = InputValidator()
        self.output_builder = OutputBuilder()
        self.export_builder = ExportBuilder()

    def process(self, bill: Bill) -> BillResult:
        """
        Process a bill through the complete pipeline.

        Args:
            bill: Bill snapshot as received from the UI

        Returns:
            BillResult with the priced roster and summary figures
        """
        # Step 1: Validate
        self.validator.validate(bill)

        # Step 2: Select regime
        pricing = pricing_for(bill.config.carrier)

        # Step 3: Reprice (identity outside the primary carrier)
        bill = pricing.reprice(bill)

        # Steps 4-6: Read-only figures derived from the priced roster
        return BillResult(
            bill=bill,
            total_per_month=bill.total_per_month,
            billable_line_count=billable_line_count(bill.lines),
            upsell=pricing.upsell_deltas(bill),
            commission=pricing.commission_summary(bill),
            advisories=collect_advisories(bill),
        )

    def apply_event(self, bill: Bill, event_type: str, **payload) -> BillResult:
        """
        Apply one edit and return the figures for the resulting bill.

        The edit itself performs any reprice it needs; prices it leaves alone
        (manual entries) are not recomputed here.
        """
        self.validator.validate(bill)
        bill = apply_event(bill, event_type, **payload)
        # Account edits can carry values the roster rules never see
        self.validator.validate(bill)
        pricing = pricing_for(bill.config.carrier)

        return BillResult(
            bill=bill,
            total_per_month=bill.total_per_month,
            billable_line_count=billable_line_count(bill.lines),
            upsell=pricing.upsell_deltas(bill),
            commission=pricing.commission_summary(bill),
            advisories=collect_advisories(bill),
        )

    def export(
        self,
        bill: Bill,
        outcomes: ExportOutcomes | None = None,
        generated_at: datetime | None = None,
    ) -> ExportDocument:
        """Build the exported summary for a bill as currently priced."""
        outcomes = outcomes or ExportOutcomes()
        self.validator.validate(bill)
        self.validator.validate_outcomes(bill, outcomes)

        pricing = pricing_for(bill.config.carrier)
        upsell = pricing.upsell_deltas(bill)
        commission = pricing.export_commission_summary(bill, upsell)

        return self.export_builder.build(
            bill,
            outcomes,
            upsell,
            commission,
            generated_at or datetime.now(),
        )

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process a bill from raw dictionary input.

        Convenience method for API usage.
        """
        result = self.process(Bill.from_dict(data))
        return self.output_builder.build(result)

    def apply_event_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply {"bill": {...}, "event": {"type": ..., ...}} and return the processed result."""
        bill = Bill.from_dict(data["bill"])
        event = dict(data["event"])
        event_type = event.pop("type")
        event = to_field_names(event, EVENT_WIRE_KEYS.get(event_type, {}))
        result = self.apply_event(bill, event_type, **event)
        return self.output_builder.build(result)

    def export_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        bill = Bill.from_dict(data["bill"])
        outcomes = ExportOutcomes.from_dict(data.get("outcomes"))
        document = self.export(bill, outcomes)
        return {
            "filename": document.filename,
            "lines": document.lines,
            "commission": commission_to_dict(document.commission),
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def process_bill_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Process a bill from Python dict and return Python dict.
    """
    processor = BillProcessor()
    return processor.process_from_dict(input_data)


def process_bill_from_json(json_input: str) -> str:
    """
    Process a bill from JSON string input and return JSON string output.
    """
    try:
        input_data = json.loads(json_input)
        processor = BillProcessor()
        result = processor.process_from_dict(input_data)
        return json.dumps(result, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)
