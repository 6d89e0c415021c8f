"""Quotation pricing: subtotal, GST breakdown and final total.

Pure functions over ``Decimal``; nothing here touches the database.

Rounding rules:

* ``round2`` rounds half away from zero to 2 decimal places.
* The subtotal is never rounded mid-sum; it is rounded only where it is
  exposed (``QuotationTotals.sub_total``) or consumed (the final total).
* Each field of the GST breakdown is rounded independently, so for an
  intrastate quotation ``sgst + cgst`` may differ from ``total_gst`` by 0.01.

Manual overrides are applied in this order, highest first:

1. ``manual_gst_amount``: absolute tax amount, whatever the GST type.
2. intrastate with ``manual_sgst_percentage`` or ``manual_cgst_percentage``:
   the overridden side is ``subtotal * pct / 100``, the other side is the
   auto-computed (rounded) breakdown value.
3. interstate with ``manual_igst_percentage``: ``subtotal * pct / 100``.
4. otherwise the unrounded auto-computed GST.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping

INTRASTATE = "intrastate"
INTERSTATE = "interstate"

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TWO = Decimal("2")
CENT = Decimal("0.01")


@dataclass(frozen=True)
class GstBreakdown:
    raw_total: Decimal
    total_gst: Decimal
    sgst: Decimal
    cgst: Decimal
    igst: Decimal

    def as_dict(self) -> dict:
        return {
            "total_gst": self.total_gst,
            "sgst": self.sgst,
            "cgst": self.cgst,
            "igst": self.igst,
        }


@dataclass(frozen=True)
class TaxOverrides:
    manual_gst_amount: Decimal | None = None
    manual_sgst_percentage: Decimal | None = None
    manual_cgst_percentage: Decimal | None = None
    manual_igst_percentage: Decimal | None = None


@dataclass(frozen=True)
class QuotationTotals:
    sub_total: Decimal
    gst_breakdown: GstBreakdown
    total: Decimal


def to_decimal(value: Any) -> Decimal:
    """Coerce ``value`` to ``Decimal``; ``None`` and ``""`` become 0."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _optional_decimal(value: Any) -> Decimal | None:
    return None if value is None else to_decimal(value)


def round2(value: Any) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def line_total(item: Any) -> Decimal:
    return to_decimal(_field(item, "quantity")) * to_decimal(_field(item, "rate"))


def calculate_subtotal(items: Iterable[Any]) -> Decimal:
    return sum((line_total(item) for item in items), ZERO)


def calculate_gst_breakdown(items: Iterable[Any], gst_type: str | None) -> GstBreakdown:
    raw = sum(
        (line_total(item) * to_decimal(_field(item, "gst_percentage")) / HUNDRED for item in items),
        ZERO,
    )
    sgst = cgst = igst = ZERO
    if gst_type == INTRASTATE:
        sgst = cgst = raw / TWO
    elif gst_type == INTERSTATE:
        igst = raw

    return GstBreakdown(
        raw_total=raw,
        total_gst=round2(raw),
        sgst=round2(sgst),
        cgst=round2(cgst),
        igst=round2(igst),
    )


def calculate_total(
    subtotal: Decimal,
    breakdown: GstBreakdown,
    gst_type: str | None,
    overrides: TaxOverrides | None = None,
) -> Decimal:
    overrides = overrides or TaxOverrides()
    subtotal = to_decimal(subtotal)
    manual_amount = _optional_decimal(overrides.manual_gst_amount)
    sgst_pct = _optional_decimal(overrides.manual_sgst_percentage)
    cgst_pct = _optional_decimal(overrides.manual_cgst_percentage)
    igst_pct = _optional_decimal(overrides.manual_igst_percentage)

    if manual_amount is not None:
        tax = manual_amount
    elif gst_type == INTRASTATE and (sgst_pct is not None or cgst_pct is not None):
        sgst = subtotal * sgst_pct / HUNDRED if sgst_pct is not None else breakdown.sgst
        cgst = subtotal * cgst_pct / HUNDRED if cgst_pct is not None else breakdown.cgst
        tax = sgst + cgst
    elif gst_type == INTERSTATE and igst_pct is not None:
        tax = subtotal * igst_pct / HUNDRED
    else:
        tax = breakdown.raw_total

    return round2(subtotal + tax)


def calculate_quotation_totals(
    items: Iterable[Any],
    gst_type: str | None,
    overrides: TaxOverrides | None = None,
) -> QuotationTotals:
    items = list(items)
    subtotal = calculate_subtotal(items)
    breakdown = calculate_gst_breakdown(items, gst_type)
    return QuotationTotals(
        sub_total=round2(subtotal),
        gst_breakdown=breakdown,
        total=calculate_total(subtotal, breakdown, gst_type, overrides),
    )
