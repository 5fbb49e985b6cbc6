"""
Output Builder

Constructs API responses and the exported summary document from processed
bills. Nothing here alters a price.
"""

from datetime import datetime
from decimal import Decimal

from .models import (
    Bill,
    BillResult,
    CommissionSummary,
    ExportDocument,
    ExportOutcomes,
    Line,
    LineOutcome,
    UpsellDeltas,
)
from .tables import DEVICE_PRICES, is_primary_carrier, plan_options


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return round(float(value), 2)


def _optional_money(value: Decimal | None) -> float | None:
    return to_money(value) if value is not None else None


def _fmt(value) -> str:
    """Format a number as currency string for descriptions."""
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"


def _signed(value) -> str:
    return f"+{_fmt(value)}" if value >= 0 else _fmt(value)


def _fmt_whole(value) -> str:
    """Commissions are whole dollars."""
    return f"${value:,.0f}"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def line_to_dict(line: Line) -> dict:
    return {
        "id": line.line_id,
        "customer_name": line.customer_name,
        "label": line.label,
        "price_per_month": to_money(line.price_per_month),
        "hotspot": line.is_hotspot_add_on,
        "data_device": line.is_data_device,
        "suggested_replacement": line.suggested_replacement_plan,
        "add_on_pro1": line.add_on_pro1,
        "add_on_pro4": line.add_on_pro4,
        "add_on_htp": line.add_on_htp,
        "add_on_turbo": line.add_on_turbo,
    }


def bill_to_dict(bill: Bill) -> dict:
    """Inverse of Bill.from_dict."""
    config = bill.config
    holder = bill.account_holder
    return {
        "carrier": config.carrier,
        "discount_25_eligible": config.discount_25_eligible,
        "senior_55": config.senior_55,
        "internet_air": config.internet_air,
        "kicker_unlocked": config.kicker_unlocked,
        "aia_eligibility": config.aia_eligible,
        "account_holder_name": holder.name,
        "account_holder_phone": holder.phone,
        "account_holder_employer_or_title": holder.employer_or_title,
        "account_holder_email": holder.email,
        "account_holder_address": holder.address,
        "sales_rep_name": bill.sales_rep_name,
        "sales_rep_notes": bill.sales_rep_notes,
        "lines": [line_to_dict(line) for line in bill.lines],
    }


def commission_to_dict(summary: CommissionSummary) -> dict:
    return {
        "items": [
            {
                "label": item.label,
                "count": item.count,
                "rate": to_money(item.rate),
                "amount": to_money(item.amount),
            }
            for item in summary.items
        ],
        "total": to_money(summary.total),
    }


def upsell_to_dict(upsell: UpsellDeltas) -> dict:
    return {
        "premium_delta": _optional_money(upsell.premium_delta),
        "extra_delta": _optional_money(upsell.extra_delta),
        "internet_monthly_price": _optional_money(upsell.internet_monthly_price),
    }


class OutputBuilder:
    """Builds the API response for a processed bill."""

    def build(self, result: BillResult) -> dict:
        bill = result.bill
        output = {
            "bill": bill_to_dict(bill),
            "totals": {
                "total_per_month": to_money(result.total_per_month),
                "billable_line_count": result.billable_line_count,
                "line_count": len(bill.lines),
                "prices_before_taxes": True,
            },
            "upsell": upsell_to_dict(result.upsell),
            "commission": commission_to_dict(result.commission),
            "advisories": list(result.advisories),
        }
        if is_primary_carrier(bill.config.carrier):
            output["plan_options"] = list(plan_options(bill.config))
            output["upsell"]["data_device_price_range"] = [
                to_money(min(DEVICE_PRICES.values())),
                to_money(max(DEVICE_PRICES.values())),
            ]
        return output


class ExportBuilder:
    """Renders the static summary handed to the document exporter."""

    TITLE = "Rerate Assistant - Summary"

    def build(
        self,
        bill: Bill,
        outcomes: ExportOutcomes,
        upsell: UpsellDeltas,
        commission: CommissionSummary,
        generated_at: datetime,
    ) -> ExportDocument:
        out = [self.TITLE, f"Generated: {generated_at:%Y-%m-%d %H:%M}"]

        if bill.sales_rep_name.strip():
            out.append(f"Sales rep: {bill.sales_rep_name.strip()}")
        if bill.sales_rep_notes.strip():
            out.append("Notes:")
            out.extend(bill.sales_rep_notes.strip().splitlines())

        self._account_holder(out, bill)
        self._bill_information(out, bill)
        self._phone_lines(out, bill)
        self._outcomes(out, bill, outcomes)
        self._opportunities(out, bill, upsell, commission)

        return ExportDocument(
            lines=out,
            commission=commission,
            filename=f"rerate-assistant-{generated_at:%Y-%m-%d}.pdf",
        )

    def _section(self, out: list, title: str) -> None:
        out.append("")
        out.append(title)

    def _account_holder(self, out: list, bill: Bill) -> None:
        holder = bill.account_holder
        self._section(out, "Account holder")
        out.append(holder.name or "(not provided)")
        out.append(holder.phone)
        if holder.employer_or_title.strip():
            out.append(f"Employer / Job title: {holder.employer_or_title.strip()}")
        out.append(holder.email)
        out.append(holder.address)

    def _bill_information(self, out: list, bill: Bill) -> None:
        config = bill.config
        self._section(out, "Bill information")
        out.append(f"Carrier: {config.carrier or '(not selected)'}")
        out.append(f"AIA Eligible: {_yes_no(config.aia_eligible)}")
        if is_primary_carrier(config.carrier):
            out.append(f"25% Discount Eligible: {_yes_no(config.discount_25_eligible)}")
            out.append(f"55+: {_yes_no(config.senior_55)}")
        out.append(f"Kicker Unlocked: {_yes_no(config.kicker_unlocked)}")

    def _phone_lines(self, out: list, bill: Bill) -> None:
        self._section(out, "Phone lines")
        primary = is_primary_carrier(bill.config.carrier)
        for i, line in enumerate(bill.lines, start=1):
            if primary:
                plan = line.label
            else:
                plan = f"Suggest: {line.suggested_replacement_plan}" if line.suggested_replacement_plan else ""
            add_ons = ", ".join(line.pitched_add_ons()) or "-"
            out.append(
                f"Line {i}: {line.customer_name or '-'} | {plan or '-'} | "
                f"Add-ons: {add_ons} | {_fmt(line.price_per_month)}/mo"
            )
        out.append(f"Estimated monthly total (lines): {_fmt(bill.total_per_month)}")
        out.append("All prices are shown before taxes.")

    def _outcomes(self, out: list, bill: Bill, outcomes: ExportOutcomes) -> None:
        # Outcomes are only meaningful when every line has one
        if not outcomes.lines or len(outcomes.lines) != len(bill.lines):
            return

        self._section(out, "Line outcomes (did you sell each line?)")
        for i, (line, outcome) in enumerate(zip(bill.lines, outcomes.lines), start=1):
            self._outcome(out, f"Line {i}: {line.customer_name or '-'}", outcome)

        if outcomes.internet is not None:
            self._outcome(out, "High Speed Internet", outcomes.internet)

        if outcomes.add_ons:
            self._section(out, "Add-on outcomes (did you sell each add-on?)")
            for outcome in outcomes.add_ons:
                line = bill.lines[outcome.line_index]
                desc = f"Line {outcome.line_index + 1}: {line.customer_name or '-'} - {outcome.add_on}"
                self._outcome(out, desc, LineOutcome(sold=outcome.sold, objections=outcome.objections))

    def _outcome(self, out: list, desc: str, outcome: LineOutcome) -> None:
        out.append(f"{desc} - {'Sold' if outcome.sold else 'Not sold'}")
        if not outcome.sold and outcome.objections.strip():
            out.append(f"Objections: {outcome.objections.strip()}")

    def _opportunities(
        self, out: list, bill: Bill, upsell: UpsellDeltas, commission: CommissionSummary
    ) -> None:
        self._section(out, "Opportunities / Commission")
        out.append(f"Estimated total: {_fmt(bill.total_per_month)}")
        carrier = bill.config.carrier

        if is_primary_carrier(carrier):
            increases = {
                "Add one more line (Premium)": upsell.premium_delta,
                "Add one more line (Extra)": upsell.extra_delta,
                "Add High Speed Internet": upsell.internet_monthly_price,
            }
            for item in commission.items:
                increase = increases.get(item.label)
                out.append(f"{item.label}: {_signed(increase or Decimal('0'))}/mo - Commission: {_fmt_whole(item.rate)}")
            out.append(f"Total potential commission: {_fmt_whole(commission.total)}")
        elif carrier:
            for item in commission.items:
                if item.label == "High Speed Internet":
                    out.append(f"{item.label}: {_fmt_whole(item.amount)}")
                else:
                    out.append(f"{item.label} ({item.count}): {_fmt_whole(item.amount)}")
            out.append(f"Total commission: {_fmt_whole(commission.total)}")

