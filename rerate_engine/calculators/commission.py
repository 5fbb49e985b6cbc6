"""
Commission Calculator

Handles commission calculation for the primary carrier and for all other
carriers. The two formulas are structurally different:

Primary carrier:
- One row per opportunity (another Premium line, another Extra line,
  a tablet or wearable, High Speed Internet)
- The total is a fixed constant, not a sum of the rows

Other carriers:
- Rows are counts of what the rep pitched times a per-item rate
- The total is the sum of the rows
"""

from decimal import Decimal

from ..models import Bill, CommissionItem, CommissionSummary, UpsellDeltas
from ..tables import (
    DATA_DEVICES,
    EXTRA_PLAN,
    PREMIUM_PLAN,
    PRIMARY_EXPORT_TOTAL_WITH_DELTAS,
    PRIMARY_EXPORT_TOTAL_WITHOUT_DELTAS,
    PRIMARY_LIVE_TOTAL,
    commission_rate,
)


def _item(label: str, count: int, rate: Decimal) -> CommissionItem:
    return CommissionItem(label=label, count=count, rate=rate, amount=rate * count)


def _pick(pair: tuple[Decimal, Decimal], kicker_unlocked: bool) -> Decimal:
    locked, unlocked = pair
    return unlocked if kicker_unlocked else locked


class PrimaryCommissionCalculator:
    """Opportunity commissions when the customer is already on the primary carrier."""

    def live(self, bill: Bill) -> CommissionSummary:
        kicker = bill.config.kicker_unlocked
        items = [
            _item("Add one more line (Premium)", 1, commission_rate("premium_line", kicker)),
            _item("Add one more line (Extra)", 1, commission_rate("extra_line", kicker)),
            _item("Add tablet or wearable", 1, commission_rate("data_device", kicker)),
            _item("Add High Speed Internet", 1, commission_rate("internet", kicker)),
        ]
        return CommissionSummary(items=items, total=_pick(PRIMARY_LIVE_TOTAL, kicker))

    def export(self, bill: Bill, upsell: UpsellDeltas | None) -> CommissionSummary:
        """
        Commission block of the exported summary.

        Line rows appear only for the deltas that were supplied. Internet is
        always listed as an assumed-won commission.
        """
        kicker = bill.config.kicker_unlocked
        upsell = upsell or UpsellDeltas()

        items = []
        if upsell.premium_delta is not None:
            items.append(_item("Add one more line (Premium)", 1, commission_rate("premium_line", kicker)))
        if upsell.extra_delta is not None:
            items.append(_item("Add one more line (Extra)", 1, commission_rate("extra_line", kicker)))
        items.append(_item("Add High Speed Internet", 1, commission_rate("internet", kicker)))

        table = PRIMARY_EXPORT_TOTAL_WITH_DELTAS if upsell.available else PRIMARY_EXPORT_TOTAL_WITHOUT_DELTAS
        return CommissionSummary(items=items, total=_pick(table, kicker))


class OtherCommissionCalculator:
    """Commissions for moving a customer over from another carrier."""

    def live(self, bill: Bill) -> CommissionSummary:
        """On-screen breakdown: internet only counts when the add-on is toggled."""
        return self._summarize(
            bill,
            include_data_devices=True,
            include_internet=bill.config.internet_air,
        )

    def export(self, bill: Bill) -> CommissionSummary:
        # The exported summary always counts internet and never counts data
        # devices, unlike the on-screen breakdown.
        return self._summarize(bill, include_data_devices=False, include_internet=True)

    def _summarize(self, bill: Bill, include_data_devices: bool, include_internet: bool) -> CommissionSummary:
        kicker = bill.config.kicker_unlocked
        lines = bill.lines

        counts = [
            ("Premium", "premium_line",
             sum(1 for line in lines if line.suggested_replacement_plan == PREMIUM_PLAN)),
            ("Extra", "extra_line",
             sum(1 for line in lines if line.suggested_replacement_plan == EXTRA_PLAN)),
        ]
        if include_data_devices:
            counts.append((
                "Tablet / Wearable", "data_device",
                sum(1 for line in lines if line.is_data_device and line.label in DATA_DEVICES),
            ))

        items = [
            _item(label, count, commission_rate(key, kicker))
            for label, key, count in counts
            if count > 0
        ]
        if include_internet:
            items.append(_item("High Speed Internet", 1, commission_rate("internet", kicker)))

        add_on_counts = [
            ("Pro 1", "pro1", sum(1 for line in lines if line.add_on_pro1)),
            ("Pro 4", "pro4", sum(1 for line in lines if line.add_on_pro4)),
            ("HTP", "htp", sum(1 for line in lines if line.add_on_htp)),
            ("Turbo", "turbo", sum(1 for line in lines if line.add_on_turbo)),
        ]
        items.extend(
            _item(label, count, commission_rate(key, kicker))
            for label, key, count in add_on_counts
            if count > 0
        )

        total = sum((item.amount for item in items), Decimal("0"))
        return CommissionSummary(items=items, total=total)
