"""
Upsell Calculator

Estimates what one more billable line would add to the monthly bill at
each reference plan.
"""

from decimal import Decimal

from ..models import Bill, Line, UpsellDeltas
from ..tables import EXTRA_PLAN, PREMIUM_PLAN, internet_price
from .discounts import DiscountStack, quantize_money
from .line_pricer import LinePricer, billable_line_count


class UpsellCalculator:
    """Price deltas for adding a Premium or an Extra line."""

    def __init__(self):
        self.line_pricer = LinePricer()
        self.discount_stack = DiscountStack()

    def calculate(self, bill: Bill) -> UpsellDeltas:
        """
        Price the roster as if it had one more billable line.

        Every existing line is re-priced at the incremented count, the new
        line is priced at that count for the reference plan, and the delta
        is measured against the current (possibly manually edited) total.
        Discount qualification uses the current roster.
        """
        lines = bill.lines
        discount_25 = bill.config.discount_25_eligible
        one_more = billable_line_count(lines) + 1

        existing_if_one_more = sum(
            (
                self.discount_stack.apply(
                    self.line_pricer.base_price(line, one_more), line.label, lines, discount_25
                )
                for line in lines
            ),
            Decimal('0'),
        )
        current_total = bill.total_per_month

        return UpsellDeltas(
            premium_delta=self._delta(PREMIUM_PLAN, one_more, existing_if_one_more, current_total, bill),
            extra_delta=self._delta(EXTRA_PLAN, one_more, existing_if_one_more, current_total, bill),
            internet_monthly_price=internet_price(bill.config),
        )

    def _delta(
        self,
        plan: str,
        line_count: int,
        existing_if_one_more: Decimal,
        current_total: Decimal,
        bill: Bill,
    ) -> Decimal:
        new_line = self.discount_stack.apply(
            self.line_pricer.base_price(Line(label=plan), line_count),
            plan,
            bill.lines,
            bill.config.discount_25_eligible,
        )
        return quantize_money(existing_if_one_more + new_line - current_total)
