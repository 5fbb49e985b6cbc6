"""
Roster Events

Every edit the sales rep makes arrives here as an event and produces a new
Bill. Edits that can move a price all finish with the one canonical
reprice; edits that cannot leave prices untouched, which is how manual
price entries survive until the next roster-affecting change.

Out-of-bounds edits (an 11th line, removing the last line, an index that
does not exist) are rejected silently: the same Bill comes back.
"""

import logging
from dataclasses import replace
from decimal import Decimal

from .calculators import quantize_money
from .models import Bill, Line, parse_money
from .regimes import reprice_roster
from .tables import MAX_LINES

logger = logging.getLogger(__name__)

# Line fields whose change can move a price somewhere on the roster
PRICE_AFFECTING_LINE_FIELDS = {"label", "is_data_device", "is_hotspot_add_on"}

# Line fields update_line may not touch
FIXED_LINE_FIELDS = {"line_id", "price_per_month"}

# Account fields whose change can move a price
PRICE_AFFECTING_ACCOUNT_FIELDS = {"carrier", "discount_25_eligible"}


def new_bill() -> Bill:
    """A blank bill with one empty line."""
    return Bill()


def add_line(bill: Bill) -> Bill:
    if len(bill.lines) >= MAX_LINES:
        logger.debug("add_line rejected: roster already has %d lines", MAX_LINES)
        return bill
    return reprice_roster(bill.with_lines(bill.lines + (Line(),)))


def remove_line(bill: Bill, index: int) -> Bill:
    if len(bill.lines) <= 1:
        logger.debug("remove_line rejected: last line cannot be removed")
        return bill
    if not 0 <= index < len(bill.lines):
        logger.debug("remove_line rejected: no line at index %d", index)
        return bill
    lines = bill.lines[:index] + bill.lines[index + 1:]
    return reprice_roster(bill.with_lines(lines))


def update_line(bill: Bill, index: int, **changes) -> Bill:
    """
    Change fields of one line.

    Switching a line to or from a data device clears its label, since plan
    names and device types do not overlap. Prices change only through
    set_line_price or a reprice, and ids never change.
    """
    fixed = FIXED_LINE_FIELDS & changes.keys()
    if fixed:
        raise ValueError(f"update_line cannot change: {sorted(fixed)}")
    if not 0 <= index < len(bill.lines):
        logger.debug("update_line rejected: no line at index %d", index)
        return bill

    current = bill.lines[index]
    if "is_data_device" in changes and changes["is_data_device"] != current.is_data_device:
        changes.setdefault("label", "")

    updated = replace(current, **changes)
    lines = bill.lines[:index] + (updated,) + bill.lines[index + 1:]
    bill = bill.with_lines(lines)

    if PRICE_AFFECTING_LINE_FIELDS & changes.keys():
        return reprice_roster(bill)
    return bill


def set_line_price(bill: Bill, index: int, price) -> Bill:
    """Manual price entry. Kept as typed until the next reprice."""
    if not 0 <= index < len(bill.lines):
        logger.debug("set_line_price rejected: no line at index %d", index)
        return bill
    price = quantize_money(max(Decimal("0"), parse_money(price)))
    line = bill.lines[index].with_price(price)
    return bill.with_lines(bill.lines[:index] + (line,) + bill.lines[index + 1:])


def update_account(bill: Bill, **changes) -> Bill:
    bill = bill.with_config(replace(bill.config, **changes))
    if PRICE_AFFECTING_ACCOUNT_FIELDS & changes.keys():
        return reprice_roster(bill)
    return bill


def update_details(bill: Bill, **changes) -> Bill:
    """Contact fields, sales rep name and notes. Never affects pricing."""
    bill_fields = {k: changes.pop(k) for k in ("sales_rep_name", "sales_rep_notes") if k in changes}
    if changes:
        bill = replace(bill, account_holder=replace(bill.account_holder, **changes))
    return replace(bill, **bill_fields)


EVENT_HANDLERS = {
    "add_line": add_line,
    "remove_line": remove_line,
    "update_line": update_line,
    "set_line_price": set_line_price,
    "update_account": update_account,
    "update_details": update_details,
}


def apply_event(bill: Bill, event_type: str, **payload) -> Bill:
    """Dispatch one named edit to its handler."""
    handler = EVENT_HANDLERS.get(event_type)
    if handler is None:
        raise ValueError(
            f"Invalid event type: {event_type}. Must be one of {sorted(EVENT_HANDLERS)}"
        )
    return handler(bill, **payload)
