from decimal import Decimal
from types import SimpleNamespace

import pytest

from quotations.pricing import (
    TaxOverrides,
    calculate_gst_breakdown,
    calculate_quotation_totals,
    calculate_subtotal,
    calculate_total,
    round2,
    to_decimal,
)

ITEMS = [{"quantity": 2, "rate": 100, "gst_percentage": 18}]


def test_intrastate_scenario_splits_gst_in_halves():
    totals = calculate_quotation_totals(ITEMS, "intrastate")

    assert totals.sub_total == Decimal("200.00")
    assert totals.gst_breakdown.total_gst == Decimal("36.00")
    assert totals.gst_breakdown.sgst == Decimal("18.00")
    assert totals.gst_breakdown.cgst == Decimal("18.00")
    assert totals.gst_breakdown.igst == Decimal("0")
    assert totals.total == Decimal("236.00")


def test_interstate_puts_everything_on_igst():
    breakdown = calculate_gst_breakdown(ITEMS, "interstate")

    assert breakdown.igst == Decimal("36.00")
    assert breakdown.sgst == Decimal("0")
    assert breakdown.cgst == Decimal("0")


def test_unknown_gst_type_has_no_split_but_keeps_raw_total():
    totals = calculate_quotation_totals(ITEMS, "export")

    breakdown = totals.gst_breakdown
    assert (breakdown.sgst, breakdown.cgst, breakdown.igst) == (0, 0, 0)
    assert breakdown.total_gst == Decimal("36.00")
    assert totals.total == Decimal("236.00")


def test_subtotal_is_not_rounded_mid_sum():
    items = [
        {"quantity": 1, "rate": "0.005"},
        {"quantity": 1, "rate": "0.005"},
    ]

    assert calculate_subtotal(items) == Decimal("0.010")
    assert calculate_quotation_totals(items, "intrastate").sub_total == Decimal("0.01")


def test_missing_values_count_as_zero():
    items = [{"quantity": None, "rate": 10}, {"rate": 5}, {}]

    assert calculate_subtotal(items) == 0
    assert calculate_gst_breakdown(items, "intrastate").raw_total == 0


def test_breakdown_fields_are_rounded_independently():
    breakdown = calculate_gst_breakdown(
        [{"quantity": 1, "rate": "0.05", "gst_percentage": 50}], "intrastate",
    )

    assert breakdown.total_gst == Decimal("0.03")
    assert breakdown.sgst == Decimal("0.01")
    assert breakdown.cgst == Decimal("0.01")


def test_manual_amount_wins_over_percentages():
    overrides = TaxOverrides(
        manual_gst_amount=Decimal("50"),
        manual_sgst_percentage=Decimal("5"),
    )

    totals = calculate_quotation_totals(ITEMS, "intrastate", overrides)

    assert totals.total == Decimal("250.00")


def test_manual_amount_applies_to_any_gst_type():
    overrides = TaxOverrides(manual_gst_amount=Decimal("12.345"))

    assert calculate_quotation_totals(ITEMS, "interstate", overrides).total == Decimal("212.35")


def test_intrastate_sgst_override_keeps_auto_cgst():
    overrides = TaxOverrides(manual_sgst_percentage=Decimal("5"))

    # 200 * 5% for SGST, auto 18.00 for CGST
    assert calculate_quotation_totals(ITEMS, "intrastate", overrides).total == Decimal("228.00")


def test_intrastate_both_side_overrides():
    overrides = TaxOverrides(
        manual_sgst_percentage=Decimal("2.5"),
        manual_cgst_percentage=Decimal("2.5"),
    )

    assert calculate_quotation_totals(ITEMS, "intrastate", overrides).total == Decimal("210.00")


def test_interstate_igst_override():
    overrides = TaxOverrides(manual_igst_percentage=Decimal("12"))

    assert calculate_quotation_totals(ITEMS, "interstate", overrides).total == Decimal("224.00")


@pytest.mark.parametrize(
    "gst_type,overrides",
    [
        ("interstate", TaxOverrides(manual_sgst_percentage=Decimal("5"))),
        ("intrastate", TaxOverrides(manual_igst_percentage=Decimal("5"))),
    ],
)
def test_override_for_the_other_gst_type_is_ignored(gst_type, overrides):
    assert calculate_quotation_totals(ITEMS, gst_type, overrides).total == Decimal("236.00")


def test_total_uses_unrounded_subtotal():
    items = [{"quantity": 1, "rate": "0.004", "gst_percentage": 0}]
    subtotal = calculate_subtotal(items)
    breakdown = calculate_gst_breakdown(items, "intrastate")
    overrides = TaxOverrides(manual_gst_amount=Decimal("0.002"))

    # 0.004 + 0.002 rounds up; 0.00 + 0.002 would not.
    assert calculate_total(subtotal, breakdown, "intrastate", overrides) == Decimal("0.01")
    assert calculate_quotation_totals(items, "intrastate", overrides).sub_total == Decimal("0.00")


def test_items_may_be_objects():
    items = [SimpleNamespace(quantity=Decimal("4"), rate=Decimal("25"), gst_percentage=Decimal("12"))]

    totals = calculate_quotation_totals(items, "interstate")

    assert totals.sub_total == Decimal("100.00")
    assert totals.gst_breakdown.igst == Decimal("12.00")
    assert totals.total == Decimal("112.00")


def test_round2_rounds_half_away_from_zero():
    assert round2("2.345") == Decimal("2.35")
    assert round2("-2.345") == Decimal("-2.35")
    assert round2(None) == Decimal("0.00")


def test_to_decimal_avoids_binary_float_error():
    assert to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")
    assert to_decimal("") == 0
