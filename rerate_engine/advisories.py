"""
Advisories

Rep-facing notices derived from the bill. They never change a price.
"""

from .models import Bill
from .tables import (
    EXTRA_PLAN,
    QUALITY_PLANS,
    RESELLER_CARRIERS,
    is_primary_carrier,
)
from .calculators.discounts import has_flat_rate_line

RESELLER_MESSAGE = (
    "This customer's current carrier is a reseller! When porting the numbers over "
    "to AT&T service you must do so as a 'Bring-Your-Own-Device' port, then upgrade "
    "the devices after the line is successfully ported over!"
)
QUALITY_MESSAGE = "This rate plan will negatively impact the store's quality metrics."
SIGNATURE_MESSAGE = (
    "If this customer qualifies for a signature discount, we can offer them "
    "better service at the same price."
)


def collect_advisories(bill: Bill) -> list[str]:
    notices = []
    if bill.config.carrier in RESELLER_CARRIERS:
        notices.append(RESELLER_MESSAGE)

    if not is_primary_carrier(bill.config.carrier):
        return notices

    family = has_flat_rate_line(bill.lines)
    for i, line in enumerate(bill.lines, start=1):
        if line.is_data_device or not line.label:
            continue
        if line.label not in QUALITY_PLANS:
            notices.append(f"Line {i}: {QUALITY_MESSAGE}")
        if line.label == EXTRA_PLAN and not family:
            notices.append(f"Line {i}: {SIGNATURE_MESSAGE}")
    return notices
