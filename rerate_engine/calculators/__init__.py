"""
Calculators Package

Provides all calculation components for bill pricing and commissions.
"""

from .commission import OtherCommissionCalculator, PrimaryCommissionCalculator
from .discounts import DiscountStack, quantize_money
from .line_pricer import LinePricer, billable_line_count
from .repricer import RosterRepricer
from .upsell import UpsellCalculator

__all__ = [
    "LinePricer",
    "DiscountStack",
    "RosterRepricer",
    "UpsellCalculator",
    "PrimaryCommissionCalculator",
    "OtherCommissionCalculator",
    "billable_line_count",
    "quantize_money",
]
