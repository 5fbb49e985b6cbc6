"""
Reference Tables

Static price lists and commission rates. Lookups never raise: an unknown
or empty key prices at zero.
"""

from decimal import Decimal

from .models import AccountConfig

MAX_LINES = 10

PRIMARY_CARRIER = "AT&T"
CARRIERS = (
    "",
    "AT&T",
    "Consumer Cellular",
    "Cricket",
    "Other",
    "Spectrum",
    "T Mobile",
    "Verizon",
)
RESELLER_CARRIERS = ("Cricket", "Consumer Cellular")

FLAT_RATE_PLAN = "FirstNet"
PREMIUM_PLAN = "Premium"
EXTRA_PLAN = "Extra"
QUALITY_PLANS = (FLAT_RATE_PLAN, PREMIUM_PLAN, EXTRA_PLAN)

PLANS = ("FirstNet", "Premium", "Extra", "Starter", "Value Plus", "Legacy")
DATA_DEVICES = ("Wearable", "Tablet")
ADD_ONS = ("Pro 1", "Pro 4", "HTP", "Turbo")

HOTSPOT_SURCHARGE = Decimal("5")
FAMILY_DISCOUNT_FACTOR = Decimal("0.75")
ACCOUNT_DISCOUNT_FACTOR = Decimal("0.75")

# High Speed Internet monthly price, by AIA eligibility
INTERNET_PRICE_AIA = Decimal("47")
INTERNET_PRICE_STANDARD = Decimal("60")

DEVICE_PRICES = {
    "Wearable": Decimal("10"),
    "Tablet": Decimal("20"),
}

PLAN_PRICES = {
    "FirstNet": Decimal("42.99"),
    "Premium": Decimal("85.99"),
    "Extra": Decimal("75.99"),
    "Starter": Decimal("65.99"),
    "Value Plus": Decimal("50.99"),
    "Legacy": Decimal("55.00"),  # legacy plans vary
}

# Per-line price for 1, 2, 3 and 4+ billable lines
PLAN_TIERS = {
    "FirstNet": (Decimal("42.99"), Decimal("42.99"), Decimal("42.99"), Decimal("42.99")),
    "Premium": (Decimal("85.99"), Decimal("75.99"), Decimal("60.99"), Decimal("50.99")),
    "Extra": (Decimal("75.99"), Decimal("65.99"), Decimal("50.99"), Decimal("40.99")),
    "Starter": (Decimal("65.99"), Decimal("60.99"), Decimal("45.99"), Decimal("35.99")),
    "Value Plus": (Decimal("50.99"), Decimal("50.99"), Decimal("37.99"), Decimal("30.99")),
    "Legacy": (Decimal("55"), Decimal("55"), Decimal("55"), Decimal("55")),
}

# Commission item -> (base rate, rate when kicker unlocked)
COMMISSION_RATES = {
    "premium_line": (Decimal("15"), Decimal("30")),
    "extra_line": (Decimal("10"), Decimal("20")),
    "data_device": (Decimal("3"), Decimal("5")),
    "internet": (Decimal("15"), Decimal("30")),
    "pro1": (Decimal("3"), Decimal("3")),
    "pro4": (Decimal("5"), Decimal("5")),
    "htp": (Decimal("5"), Decimal("5")),
    "turbo": (Decimal("2"), Decimal("2")),
}

# Fixed "sell everything" totals for the primary carrier: (locked, unlocked)
PRIMARY_LIVE_TOTAL = (Decimal("43"), Decimal("85"))
PRIMARY_EXPORT_TOTAL_WITH_DELTAS = (Decimal("40"), Decimal("80"))
PRIMARY_EXPORT_TOTAL_WITHOUT_DELTAS = (Decimal("35"), Decimal("65"))


def device_price(device_type: str) -> Decimal:
    return DEVICE_PRICES.get(device_type, Decimal("0"))


def plan_price(plan: str) -> Decimal:
    return PLAN_PRICES.get(plan, Decimal("0"))


def tier_price(plan: str, line_count: int) -> Decimal:
    """Per-line price of a plan at a billable line count (4+ share a tier)."""
    if not line_count or not plan:
        return Decimal("0")
    tiers = PLAN_TIERS.get(plan)
    if tiers is None:
        return plan_price(plan)
    return tiers[min(line_count - 1, 3)]


def commission_rate(item: str, kicker_unlocked: bool) -> Decimal:
    base, boosted = COMMISSION_RATES.get(item, (Decimal("0"), Decimal("0")))
    return boosted if kicker_unlocked else base


def internet_price(config: AccountConfig) -> Decimal:
    return INTERNET_PRICE_AIA if config.aia_eligible else INTERNET_PRICE_STANDARD


def plan_options(config: AccountConfig) -> tuple[str, ...]:
    """Plans a rep may select. FirstNet is withheld from discount-25 accounts."""
    if config.discount_25_eligible:
        return tuple(p for p in PLANS if p != FLAT_RATE_PLAN)
    return PLANS


def is_primary_carrier(carrier: str) -> bool:
    return carrier == PRIMARY_CARRIER
