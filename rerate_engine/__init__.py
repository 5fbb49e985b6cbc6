"""
RERATE ASSISTANT PRICING ENGINE
Line pricing, discount stacking and sales commissions
"""

from .models import Bill, BillResult, Line
from .processor import BillProcessor
from .regimes import (
    compute_commission_summary,
    compute_export_commission_summary,
    compute_upsell_deltas,
    reprice_roster,
)

__all__ = [
    'BillProcessor',
    'Bill',
    'BillResult',
    'Line',
    'reprice_roster',
    'compute_upsell_deltas',
    'compute_commission_summary',
    'compute_export_commission_summary',
]
