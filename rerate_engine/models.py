"""
Domain Models for the Rerate Assistant Pricing Engine

These dataclasses provide type-safe representations of all business entities.
All monetary values use Decimal for precision. Lines, account configuration
and bills are frozen snapshots: every edit produces a new object.
"""

import uuid
from dataclasses import dataclass, field, replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

# Wire (JSON) key -> dataclass field, where the two differ
LINE_WIRE_KEYS = {
    "id": "line_id",
    "hotspot": "is_hotspot_add_on",
    "data_device": "is_data_device",
    "suggested_replacement": "suggested_replacement_plan",
}
ACCOUNT_WIRE_KEYS = {
    "aia_eligibility": "aia_eligible",
}
HOLDER_WIRE_KEYS = {
    "account_holder_name": "name",
    "account_holder_phone": "phone",
    "account_holder_employer_or_title": "employer_or_title",
    "account_holder_email": "email",
    "account_holder_address": "address",
}


def generate_line_id() -> str:
    """Return a new, never reused line identifier."""
    return uuid.uuid4().hex[:12]


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, halves rounded up."""
    return value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def parse_money(value) -> Decimal:
    if value in (None, ""):
        return Decimal("0")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid money amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid money amount: {value!r}")
    return amount


def to_field_names(data: dict, wire_keys: dict) -> dict:
    """Rename wire keys to dataclass field names; other keys pass through."""
    return {wire_keys.get(key, key): value for key, value in data.items()}


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class Line:
    """One billable item on the account."""

    line_id: str = field(default_factory=generate_line_id)
    customer_name: str = ""
    label: str = ""  # plan name, or device type when is_data_device
    price_per_month: Decimal = Decimal("0")
    is_hotspot_add_on: bool = False
    is_data_device: bool = False
    suggested_replacement_plan: str = ""  # advisory only, never priced
    # Add-ons pitched for non-primary carriers; commission only, no price effect
    add_on_pro1: bool = False
    add_on_pro4: bool = False
    add_on_htp: bool = False
    add_on_turbo: bool = False

    def with_price(self, price: Decimal) -> "Line":
        return replace(self, price_per_month=price)

    def pitched_add_ons(self) -> list[str]:
        flags = (
            ("Pro 1", self.add_on_pro1),
            ("Pro 4", self.add_on_pro4),
            ("HTP", self.add_on_htp),
            ("Turbo", self.add_on_turbo),
        )
        return [name for name, on in flags if on]

    @classmethod
    def from_dict(cls, data: dict) -> "Line":
        data = to_field_names(data, LINE_WIRE_KEYS)
        return cls(
            line_id=data.get("line_id") or generate_line_id(),
            customer_name=data.get("customer_name", ""),
            label=data.get("label", "") or "",
            price_per_month=quantize_money(parse_money(data.get("price_per_month", 0))),
            is_hotspot_add_on=data.get("is_hotspot_add_on", False),
            is_data_device=data.get("is_data_device", False),
            suggested_replacement_plan=data.get("suggested_replacement_plan", "") or "",
            add_on_pro1=data.get("add_on_pro1", False),
            add_on_pro4=data.get("add_on_pro4", False),
            add_on_htp=data.get("add_on_htp", False),
            add_on_turbo=data.get("add_on_turbo", False),
        )


@dataclass(frozen=True)
class AccountConfig:
    """Carrier identity plus the account-level toggles."""

    carrier: str = ""  # "" = unset
    discount_25_eligible: bool = False
    senior_55: bool = False  # display only
    internet_air: bool = False
    kicker_unlocked: bool = False
    aia_eligible: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "AccountConfig":
        data = to_field_names(data, ACCOUNT_WIRE_KEYS)
        return cls(
            carrier=data.get("carrier", "") or "",
            discount_25_eligible=data.get("discount_25_eligible", False),
            senior_55=data.get("senior_55", False),
            internet_air=data.get("internet_air", False),
            kicker_unlocked=data.get("kicker_unlocked", False),
            aia_eligible=data.get("aia_eligible", False),
        )


@dataclass(frozen=True)
class AccountHolder:
    """Contact fields. Display only."""

    name: str = ""
    phone: str = ""
    employer_or_title: str = ""
    email: str = ""
    address: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "AccountHolder":
        data = to_field_names(data, HOLDER_WIRE_KEYS)
        return cls(
            name=data.get("name", ""),
            phone=data.get("phone", ""),
            employer_or_title=data.get("employer_or_title", ""),
            email=data.get("email", ""),
            address=data.get("address", ""),
        )


@dataclass(frozen=True)
class Bill:
    """The unit of external interchange: configuration, roster and notes."""

    config: AccountConfig = field(default_factory=AccountConfig)
    lines: tuple[Line, ...] = field(default_factory=lambda: (Line(),))
    account_holder: AccountHolder = field(default_factory=AccountHolder)
    sales_rep_name: str = ""
    sales_rep_notes: str = ""

    @property
    def total_per_month(self) -> Decimal:
        return sum((line.price_per_month for line in self.lines), Decimal("0"))

    def with_lines(self, lines) -> "Bill":
        return replace(self, lines=tuple(lines))

    def with_config(self, config: AccountConfig) -> "Bill":
        return replace(self, config=config)

    def pitched_add_ons(self) -> list[tuple[int, str]]:
        """Every (line index, add-on) pair the rep pitched, in roster order."""
        return [(i, name) for i, line in enumerate(self.lines) for name in line.pitched_add_ons()]

    @classmethod
    def from_dict(cls, data: dict) -> "Bill":
        raw_lines = data.get("lines")
        lines = tuple(Line.from_dict(d) for d in raw_lines) if raw_lines is not None else (Line(),)
        return cls(
            config=AccountConfig.from_dict(data),
            lines=lines,
            account_holder=AccountHolder.from_dict(data),
            sales_rep_name=data.get("sales_rep_name", ""),
            sales_rep_notes=data.get("sales_rep_notes", ""),
        )


@dataclass(frozen=True)
class LineOutcome:
    """Whether the rep sold an item, and the customer's objections if not."""

    sold: bool = False
    objections: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "LineOutcome":
        return cls(sold=data.get("sold", False), objections=data.get("objections", ""))


@dataclass(frozen=True)
class AddOnOutcome:
    """Outcome for one add-on pitched on one line."""

    line_index: int
    add_on: str  # "Pro 1", "Pro 4", "HTP" or "Turbo"
    sold: bool = False
    objections: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "AddOnOutcome":
        return cls(
            line_index=int(data["line_index"]),
            add_on=data["add_on"],
            sold=data.get("sold", False),
            objections=data.get("objections", ""),
        )


@dataclass(frozen=True)
class ExportOutcomes:
    """Sold / not-sold outcomes collected before exporting."""

    lines: tuple[LineOutcome, ...] = ()
    internet: LineOutcome | None = None
    add_ons: tuple[AddOnOutcome, ...] = ()

    @classmethod
    def from_dict(cls, data: dict | None) -> "ExportOutcomes":
        if not data:
            return cls()
        internet = data.get("internet")
        return cls(
            lines=tuple(LineOutcome.from_dict(d) for d in data.get("lines", [])),
            internet=LineOutcome.from_dict(internet) if internet is not None else None,
            add_ons=tuple(AddOnOutcome.from_dict(d) for d in data.get("add_ons", [])),
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass
class UpsellDeltas:
    """Monthly increase for one more line at each reference plan."""

    premium_delta: Decimal | None = None
    extra_delta: Decimal | None = None
    internet_monthly_price: Decimal | None = None

    @property
    def available(self) -> bool:
        return self.premium_delta is not None and self.extra_delta is not None


@dataclass
class CommissionItem:
    """One row of a commission breakdown."""

    label: str
    count: int
    rate: Decimal
    amount: Decimal


@dataclass
class CommissionSummary:
    """Commission breakdown and its total."""

    items: list[CommissionItem] = field(default_factory=list)
    total: Decimal = Decimal("0")


@dataclass
class BillResult:
    """Final output of processing a bill."""

    bill: Bill
    total_per_month: Decimal
    billable_line_count: int
    upsell: UpsellDeltas
    commission: CommissionSummary
    advisories: list[str] = field(default_factory=list)


@dataclass
class ExportDocument:
    """Static summary document handed to the exporter."""

    lines: list[str]
    commission: CommissionSummary
    filename: str
