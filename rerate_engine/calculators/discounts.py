"""
Discount Stack

Applies the family discount and then the account discount to a base price.
All use Decimal with ROUND_HALF_UP rounding, applied after each stage.
"""

from decimal import Decimal

from ..models import quantize_money
from ..tables import ACCOUNT_DISCOUNT_FACTOR, FAMILY_DISCOUNT_FACTOR, FLAT_RATE_PLAN


def has_flat_rate_line(lines) -> bool:
    return any(line.label == FLAT_RATE_PLAN for line in lines)


class DiscountStack:
    """
    Two-stage discount, order matters:

    1. Family discount: 25% off any line that is not on the flat-rate plan
       when the roster holds at least one flat-rate line.
    2. Account discount: a further 25% off when the account is
       discount-25 eligible.

    The intermediate result is rounded before stage 2 applies, so a stacked
    price is round(round(B * 0.75) * 0.75), not round(B * 0.5625).
    """

    def apply(self, base_price: Decimal, label: str, lines, discount_25_eligible: bool) -> Decimal:
        price = self._apply_family(base_price, label, lines)
        if discount_25_eligible:
            price = quantize_money(price * ACCOUNT_DISCOUNT_FACTOR)
        return quantize_money(max(Decimal('0'), price))

    def _apply_family(self, base_price: Decimal, label: str, lines) -> Decimal:
        if label != FLAT_RATE_PLAN and has_flat_rate_line(lines):
            return quantize_money(base_price * FAMILY_DISCOUNT_FACTOR)
        return base_price
