"""
Carrier Pricing Regimes

The carrier decides which pricing rules apply. Each regime exposes the same
capabilities so callers never branch on the carrier name themselves:

- reprice: full roster reprice (identity where prices are manual entries)
- upsell_deltas: price of one more line per reference plan
- commission_summary: on-screen commission breakdown
- export_commission_summary: commission block of the exported summary
"""

from .calculators import (
    OtherCommissionCalculator,
    PrimaryCommissionCalculator,
    RosterRepricer,
    UpsellCalculator,
)
from .models import Bill, CommissionSummary, UpsellDeltas
from .tables import is_primary_carrier


class PrimaryCarrierPricing:
    """Customer already on the primary carrier: prices are derived."""

    name = "primary"

    def __init__(self):
        self.repricer = RosterRepricer()
        self.upsell_calculator = UpsellCalculator()
        self.commission_calculator = PrimaryCommissionCalculator()

    def reprice(self, bill: Bill) -> Bill:
        return bill.with_lines(self.repricer.reprice(bill.lines, bill.config.discount_25_eligible))

    def upsell_deltas(self, bill: Bill) -> UpsellDeltas:
        return self.upsell_calculator.calculate(bill)

    def commission_summary(self, bill: Bill) -> CommissionSummary:
        return self.commission_calculator.live(bill)

    def export_commission_summary(self, bill: Bill, upsell: UpsellDeltas | None = None) -> CommissionSummary:
        return self.commission_calculator.export(bill, upsell)


class OtherCarrierPricing:
    """Customer on another carrier: prices are typed in from their bill."""

    name = "other"

    def __init__(self):
        self.commission_calculator = OtherCommissionCalculator()

    def reprice(self, bill: Bill) -> Bill:
        return bill

    def upsell_deltas(self, bill: Bill) -> UpsellDeltas:
        return UpsellDeltas()

    def commission_summary(self, bill: Bill) -> CommissionSummary:
        return self.commission_calculator.live(bill)

    def export_commission_summary(self, bill: Bill, upsell: UpsellDeltas | None = None) -> CommissionSummary:
        return self.commission_calculator.export(bill)


class UnsetCarrierPricing:
    """No carrier chosen yet: nothing to price, nothing to pitch."""

    name = "unset"

    def reprice(self, bill: Bill) -> Bill:
        return bill

    def upsell_deltas(self, bill: Bill) -> UpsellDeltas:
        return UpsellDeltas()

    def commission_summary(self, bill: Bill) -> CommissionSummary:
        return CommissionSummary()

    def export_commission_summary(self, bill: Bill, upsell: UpsellDeltas | None = None) -> CommissionSummary:
        return CommissionSummary()


def pricing_for(carrier: str):
    """Select the pricing regime for a carrier."""
    if is_primary_carrier(carrier):
        return PrimaryCarrierPricing()
    if carrier:
        return OtherCarrierPricing()
    return UnsetCarrierPricing()


# =============================================================================
# ENGINE OPERATIONS
# =============================================================================

def reprice_roster(bill: Bill) -> Bill:
    """Full recompute of every line price; identity outside the primary carrier."""
    return pricing_for(bill.config.carrier).reprice(bill)


def compute_upsell_deltas(bill: Bill) -> UpsellDeltas:
    return pricing_for(bill.config.carrier).upsell_deltas(bill)


def compute_commission_summary(bill: Bill) -> CommissionSummary:
    return pricing_for(bill.config.carrier).commission_summary(bill)


def compute_export_commission_summary(bill: Bill, upsell: UpsellDeltas | None = None) -> CommissionSummary:
    return pricing_for(bill.config.carrier).export_commission_summary(bill, upsell)
