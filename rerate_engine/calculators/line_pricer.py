"""
Line Pricer

Computes a single line's base monthly price, before any discount.
"""

from decimal import Decimal

from ..models import Line
from ..tables import FLAT_RATE_PLAN, HOTSPOT_SURCHARGE, device_price, tier_price


def billable_line_count(lines) -> int:
    """
    Count the phone lines that drive plan tiering.

    Data devices are excluded, and so is the flat-rate plan because its
    price does not change with the number of lines.
    """
    return sum(
        1 for line in lines
        if not line.is_data_device and line.label != FLAT_RATE_PLAN
    )


class LinePricer:
    """Prices one line from its plan or device at a given line count."""

    def base_price(self, line: Line, line_count: int) -> Decimal:
        if line.is_data_device:
            return device_price(line.label)

        price = tier_price(line.label, line_count)
        if line.label == FLAT_RATE_PLAN and line.is_hotspot_add_on:
            price += HOTSPOT_SURCHARGE
        return price
