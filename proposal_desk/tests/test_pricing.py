"""
Tests: Pricing engine and deal-desk warnings.

Run with:
    pytest proposal_desk/tests/test_pricing.py -v
"""

import math

import pytest
from proposal_desk.models.schemas import PriceLineItem, ProposalTotals
from proposal_desk.utils.formatting import format_percent
from proposal_desk.services.pricing_service import (
    compute_totals,
    line_amounts,
    margin_warnings,
    round_half_away_from_zero,
)


def _item(quantity, unit_price, tax_rate, label="Item") -> PriceLineItem:
    return PriceLineItem(label=label, quantity=quantity, unit_price_minor=unit_price, tax_rate=tax_rate)


class TestRounding:
    @pytest.mark.parametrize(
        "value, expected",
        [(0.5, 1), (1.5, 2), (2.5, 3), (-2.5, -3), (209.79, 210), (209.49, 209), (0, 0)],
    )
    def test_half_away_from_zero(self, value, expected):
        assert round_half_away_from_zero(value) == expected


class TestComputeTotals:
    def test_per_line_rounding(self):
        totals = compute_totals([_item(3, 333, 0.21)])
        assert totals.subtotal_minor == 999
        assert totals.tax_minor == 210
        assert totals.total_minor == 1209

    def test_empty_items(self):
        totals = compute_totals([])
        assert totals == ProposalTotals(subtotal_minor=0, tax_minor=0, total_minor=0, margin_ratio=0.0)

    def test_lines_are_rounded_before_summing(self):
        # 0.5 tax on each line rounds up twice; the unrounded sum would be 1
        items = [_item(1, 1, 0.5), _item(1, 1, 0.5)]
        totals = compute_totals(items)
        assert totals.tax_minor == 2
        assert totals.total_minor == 4

    def test_total_is_subtotal_plus_tax(self):
        items = [_item(2, 65000, 0.21), _item(7, 1999, 0.15), _item(1, 18000, 0)]
        totals = compute_totals(items)
        assert totals.total_minor == totals.subtotal_minor + totals.tax_minor

    def test_margin_ratio_is_tax_over_total(self):
        totals = compute_totals([_item(1, 1000, 0.25)])
        assert totals.tax_minor == 250
        assert totals.margin_ratio == pytest.approx(250 / 1250)

    @pytest.mark.parametrize("rate", [0, 0.1, 0.21, 0.5, 1])
    def test_margin_ratio_bounded(self, rate):
        totals = compute_totals([_item(3, 777, rate), _item(1, 12, rate)])
        assert 0 <= totals.margin_ratio <= 1

    def test_non_finite_values_count_as_zero(self):
        items = [
            _item(math.nan, 100, 0.21),
            _item(2, math.inf, 0.21),
            _item(2, 100, -math.inf),
        ]
        totals = compute_totals(items)
        assert totals.subtotal_minor == 200
        assert totals.tax_minor == 0

    def test_accepts_mappings_with_missing_fields(self):
        totals = compute_totals([
            {"quantity": 2, "unit_price_minor": 50, "tax_rate": 0.1},
            {"label": "no numbers"},
            {"quantity": None, "unit_price_minor": "abc"},
        ])
        assert totals.subtotal_minor == 100
        assert totals.tax_minor == 10

    def test_overflowing_product_counts_as_zero(self):
        totals = compute_totals([_item(1e200, 1e200, 0.21), _item(1, 10, 0)])
        assert totals.subtotal_minor == 10

    def test_zero_total_has_zero_margin(self):
        totals = compute_totals([_item(0, 500, 0.21)])
        assert totals.total_minor == 0
        assert totals.margin_ratio == 0


class TestLineItemCoercion:
    def test_blank_and_non_numeric_fields_become_zero(self):
        item = PriceLineItem(label=None, quantity=None, unit_price_minor="abc", tax_rate="0.2")
        assert item.label == ""
        assert item.quantity == 0
        assert item.unit_price_minor == 0
        assert item.tax_rate == 0.2


class TestLineAmounts:
    def test_base_and_tax(self):
        assert line_amounts(_item(3, 333, 0.21)) == (999, 210)

    def test_fractional_quantity_rounds_base(self):
        assert line_amounts(_item(1.5, 5, 0)) == (8, 0)


class TestMarginWarnings:
    def test_below_threshold_warns(self):
        totals = compute_totals([_item(1, 1000, 0.1)])
        warnings = margin_warnings(totals, 0.15)
        assert len(warnings) == 1
        assert "9%" in warnings[0]
        assert "15%" in warnings[0]

    def test_at_or_above_threshold_is_clean(self):
        totals = compute_totals([_item(1, 1000, 0.21)])
        assert margin_warnings(totals, 0.15) == []

    def test_tie_margin_matches_displayed_percent(self):
        totals = compute_totals([_item(1, 875, 1 / 7)])
        assert totals.margin_ratio == 0.125
        warnings = margin_warnings(totals, 0.15)
        assert "margin 13%" in warnings[0]
        assert format_percent(totals.margin_ratio) == "13 %"
