"""
Roster Repricer

The single canonical full reprice of a roster. Every roster-affecting event
ends here; nothing recomputes prices inline.
"""

from ..models import Line
from .discounts import DiscountStack
from .line_pricer import LinePricer, billable_line_count


class RosterRepricer:
    """Re-derives every line's price from the roster's own contents."""

    def __init__(self):
        self.line_pricer = LinePricer()
        self.discount_stack = DiscountStack()

    def reprice(self, lines, discount_25_eligible: bool) -> tuple[Line, ...]:
        """
        Recompute every line's monthly price.

        1. Count billable phone lines over the new roster
        2. Base-price each line at that count
        3. Discount each price against the new roster
        4. Return new lines carrying the new price, all other fields kept
        """
        lines = tuple(lines)
        count = billable_line_count(lines)

        return tuple(
            line.with_price(
                self.discount_stack.apply(
                    self.line_pricer.base_price(line, count),
                    line.label,
                    lines,
                    discount_25_eligible,
                )
            )
            for line in lines
        )
