"""
Unit tests for the variant weight parser.

Run: pytest tests/unit/test_weight_parser.py -v
"""

import pytest

from parsers.weight_parser import parse_weight, is_weight_label, parse_leading_number
from models.catalog import SelectedOption


class TestIsWeightLabel:
    """Tests for is_weight_label()"""

    @pytest.mark.parametrize("name", ["Weight", "weight", "WEIGHT", " Grams ", "g", "Gm", "wt", "Gold Weight", "Weight (g)"])
    def test_weight_like_names(self, name):
        assert is_weight_label(name) is True

    @pytest.mark.parametrize("name", ["Size", "Color", "Purity", "Weighted", "", None, 10])
    def test_other_names(self, name):
        assert is_weight_label(name) is False


class TestParseLeadingNumber:
    """Tests for parse_leading_number()"""

    def test_integer_with_unit(self):
        assert parse_leading_number("10g") == 10.0

    def test_decimal_with_spaced_unit(self):
        assert parse_leading_number(" 2.5 grams") == 2.5

    def test_leading_dot_decimal(self):
        assert parse_leading_number(".75g") == 0.75

    def test_numeric_value_passes_through(self):
        assert parse_leading_number(12) == 12.0

    def test_text_before_number_is_none(self):
        assert parse_leading_number("approx 3g") is None

    def test_bool_is_none(self):
        assert parse_leading_number(True) is None


class TestParseWeight:
    """Tests for parse_weight()"""

    def test_reads_weight_option(self):
        """Should return grams from a Weight option."""
        options = [{"name": "Size", "value": "M"}, {"name": "Weight", "value": "10.5 g"}]

        assert parse_weight(options) == 10.5

    def test_case_insensitive_name(self):
        assert parse_weight([{"name": "GRAMS", "value": "4"}]) == 4.0

    def test_no_weight_option_returns_none(self):
        """Variant with only a Size option has no weight."""
        assert parse_weight([{"name": "Size", "value": "M"}]) is None

    def test_malformed_number_returns_none(self):
        """Should return None, not raise, for text like "approx"."""
        assert parse_weight([{"name": "Weight", "value": "approx"}]) is None

    def test_zero_weight_returns_none(self):
        assert parse_weight([{"name": "Weight", "value": "0g"}]) is None

    def test_first_weight_option_wins(self):
        options = [{"name": "Weight", "value": "3g"}, {"name": "Grams", "value": "9"}]

        assert parse_weight(options) == 3.0

    def test_unreadable_weight_option_falls_through(self):
        """A later weight option is used when an earlier one has no number."""
        options = [{"name": "Weight", "value": "n/a"}, {"name": "Gold Weight", "value": "10g"}]

        assert parse_weight(options) == 10.0

    def test_accepts_option_models(self):
        options = [SelectedOption(name="Weight", value="7g")]

        assert parse_weight(options) == 7.0

    def test_empty_list_returns_none(self):
        assert parse_weight([]) is None

    @pytest.mark.parametrize("options", [
        None,
        "Weight: 10g",
        {"name": "Weight", "value": "10g"},
        42,
        [None, "x", 3],
        [{"name": None, "value": "10"}],
        [{"name": "Weight"}],
        [{"name": "Weight", "value": None}],
        [{"name": "Weight", "value": "inf"}],
    ])
    def test_malformed_input_never_raises(self, options):
        assert parse_weight(options) is None
