"""
Input Validation for the Rerate Assistant Pricing Engine

Validates bills and export outcomes as they cross the API boundary.
Raises ValueError with clear messages for any constraint violations.
Nothing past this point raises: the pricing path degrades to zero instead.
"""

from .models import Bill, ExportOutcomes
from .tables import ADD_ONS, CARRIERS, MAX_LINES


class InputValidator:
    """Validates inbound bills according to business rules."""

    def validate(self, bill: Bill) -> None:
        """
        Run all validations. Raises ValueError if any check fails.
        """
        self._validate_config(bill)
        self._validate_lines(bill)

    def validate_outcomes(self, bill: Bill, outcomes: ExportOutcomes) -> None:
        pitched = set(bill.pitched_add_ons())
        for outcome in outcomes.add_ons:
            if outcome.add_on not in ADD_ONS:
                raise ValueError(f"Invalid add_on: {outcome.add_on}. Must be one of {list(ADD_ONS)}")
            if not 0 <= outcome.line_index < len(bill.lines):
                raise ValueError(f"add-on outcome refers to missing line index: {outcome.line_index}")
            if (outcome.line_index, outcome.add_on) not in pitched:
                raise ValueError(
                    f"add-on outcome for {outcome.add_on} on line {outcome.line_index + 1}, which was not pitched"
                )

    def _validate_config(self, bill: Bill) -> None:
        if bill.config.carrier not in CARRIERS:
            raise ValueError(
                f"Invalid carrier: {bill.config.carrier}. Must be one of {[c for c in CARRIERS if c]} or empty"
            )

    def _validate_lines(self, bill: Bill) -> None:
        count = len(bill.lines)
        if count < 1:
            raise ValueError("A bill must have at least one line")
        if count > MAX_LINES:
            raise ValueError(f"A bill cannot have more than {MAX_LINES} lines, got: {count}")

        seen = set()
        for line in bill.lines:
            if line.price_per_month < 0:
                raise ValueError(f"price_per_month cannot be negative: {line.line_id}")
            if line.line_id in seen:
                raise ValueError(f"Duplicate line id: {line.line_id}")
            seen.add(line.line_id)
