"""
Unit tests for price calculation.

Formula: final = (weight × rate) × (1 + percent / 100)
"""

import pytest
from decimal import Decimal

from services.price_calculator import (
    compute_price,
    clamp_price,
    price_delta,
    exceeds_dead_band,
    round_currency,
    format_price,
    format_markup,
)


class TestComputePrice:
    """Tests for compute_price()"""

    @pytest.mark.parametrize("weight, rate", [
        (10, 6000),
        (0.1, 0.3),
        (3.3, 7123.45),
        (2.75, 0),
    ])
    def test_zero_percent_is_exact_base(self, weight, rate):
        """No markup means exactly weight × rate, no drift."""
        assert compute_price(weight, rate, 0) == weight * rate

    @pytest.mark.parametrize("weight, rate, percent", [
        (10, 6000, 10),
        (2.5, 512.75, 3.5),
        (1.2, 100, -15),
        (7, 33.3, 250),
    ])
    def test_matches_formula(self, weight, rate, percent):
        assert compute_price(weight, rate, percent) == (weight * rate) * (1 + percent / 100)

    def test_gold_example(self):
        """10 g at 6000/g with no markup is 60000."""
        assert compute_price(10, 6000, 0) == 60000

    def test_markup(self):
        assert compute_price(10, 100, 10) == pytest.approx(1100)

    def test_large_discount_is_not_clamped(self):
        """-150% produces a negative price; clamping is a separate policy."""
        assert compute_price(10, 100, -150) == pytest.approx(-500)


class TestClampPrice:
    """Tests for clamp_price()"""

    def test_clamps_when_enabled(self):
        assert clamp_price(-500.0, True) == 0.0

    def test_keeps_negative_when_disabled(self):
        assert clamp_price(-500.0, False) == -500.0

    def test_positive_untouched(self):
        assert clamp_price(12.5, True) == 12.5


class TestDeadBand:
    """Tests for price_delta() and exceeds_dead_band()"""

    def test_delta_is_exact(self):
        """5000.01 - 5000 is exactly one cent, not float noise."""
        assert price_delta(5000.01, 5000.0) == Decimal("0.01")

    def test_exactly_one_cent_is_within_band(self):
        assert exceeds_dead_band(5000.01, 5000.0, 0.01) is False

    def test_more_than_one_cent_exceeds_band(self):
        assert exceeds_dead_band(5000.02, 5000.0, 0.01) is True

    def test_direction_does_not_matter(self):
        assert exceeds_dead_band(4999.98, 5000.0, 0.01) is True

    def test_sub_cent_difference_within_band(self):
        assert exceeds_dead_band(5000.004, 5000.0, 0.01) is False


class TestFormatting:
    """Tests for display helpers."""

    def test_round_currency_half_up(self):
        assert round_currency(2.675) == Decimal("2.68")

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_round_currency_rejects_non_finite(self, value):
        with pytest.raises(ValueError):
            round_currency(value)

    def test_format_price(self):
        assert format_price(60000) == "₹60,000.00"

    def test_format_negative_price(self):
        assert format_price(-12.5, "$") == "-$12.50"

    @pytest.mark.parametrize("percent, label", [
        (10, "+10%"),
        (10.0, "+10%"),
        (2.5, "+2.5%"),
        (0, "0%"),
        (-5, "-5%"),
    ])
    def test_format_markup(self, percent, label):
        assert format_markup(percent) == label
