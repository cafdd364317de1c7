"""
Unit tests for pricing-input and change-set parsers.

Run: pytest tests/unit/test_input_parsers.py -v
"""

import json
import pytest

from models.pricing import PricingConfig
from models.price_update import ChangeRecord
from parsers.pricing_input_parser import (
    to_number,
    parse_rate,
    parse_percent,
    parse_pricing_state,
    dump_pricing_state,
)
from parsers.change_set_parser import parse_changes_payload, serialize_changes


class TestToNumber:
    """Tests for to_number()"""

    @pytest.mark.parametrize("raw, expected", [
        ("6000", 6000.0),
        (" 12.5 ", 12.5),
        ("-3", -3.0),
        (7, 7.0),
        (0.25, 0.25),
    ])
    def test_numeric_values(self, raw, expected):
        assert to_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "12g", True, "nan", "inf", float("inf"), [1]])
    def test_rejected_values(self, raw):
        assert to_number(raw) is None


class TestParseRate:
    """Tests for parse_rate()"""

    def test_positive_rate(self):
        result = parse_rate("6000")

        assert result.success is True
        assert result.value == 6000.0

    @pytest.mark.parametrize("raw", ["0", "-1", "", "six"])
    def test_invalid_rate(self, raw):
        result = parse_rate(raw)

        assert result.success is False
        assert result.value is None
        assert result.error == "Enter a valid positive rate."


class TestParsePercent:
    """Tests for parse_percent()"""

    @pytest.mark.parametrize("raw, expected", [
        ("10", 10.0),
        ("-5", -5.0),
        ("", 0.0),
        ("ten", 0.0),
        (None, 0.0),
    ])
    def test_values(self, raw, expected):
        assert parse_percent(raw) == expected


class TestParsePricingState:
    """Tests for parse_pricing_state()"""

    def test_absent_document(self):
        result = parse_pricing_state(None)

        assert result.success is True
        assert result.entries == {}

    def test_valid_document(self):
        raw = json.dumps({"gid://shopify/Collection/1": {"ratePerGram": 95, "percent": -2}})

        result = parse_pricing_state(raw)

        assert result.entries == {
            "gid://shopify/Collection/1": PricingConfig(rate_per_gram=95, percent=-2)
        }
        assert result.dropped_keys == []

    def test_invalid_json(self):
        result = parse_pricing_state("{oops")

        assert result.success is False
        assert "invalid JSON" in result.error
        assert result.entries == {}

    def test_non_object_document(self):
        result = parse_pricing_state("[]")

        assert result.success is False
        assert result.error == "expected object, got list"

    def test_bad_entries_dropped_and_reported(self):
        raw = json.dumps({
            "a": {"ratePerGram": "12", "percent": None},
            "b": {"percent": 3},
            "c": 7,
        })

        result = parse_pricing_state(raw)

        assert result.success is True
        assert result.entries == {"a": PricingConfig(rate_per_gram=12, percent=0)}
        assert result.dropped_keys == ["b", "c"]

    def test_dump_matches_persisted_shape(self):
        entries = {"a": PricingConfig(rate_per_gram=6000, percent=1.5)}

        dumped = json.loads(dump_pricing_state(entries))

        assert dumped == {"a": {"ratePerGram": 6000.0, "percent": 1.5}}
        assert parse_pricing_state(dump_pricing_state(entries)).entries == entries


class TestParseChangesPayload:
    """Tests for parse_changes_payload()"""

    def test_valid_payload(self):
        raw = json.dumps([
            {"productId": "gid://shopify/Product/1", "variantId": "gid://shopify/ProductVariant/11", "newPrice": 60000},
        ])

        result = parse_changes_payload(raw)

        assert result.success is True
        assert result.changes == [ChangeRecord(
            product_id="gid://shopify/Product/1",
            variant_id="gid://shopify/ProductVariant/11",
            new_price=60000.0
        )]

    def test_empty_array_is_valid(self):
        result = parse_changes_payload("[]")

        assert result.success is True
        assert result.changes == []

    @pytest.mark.parametrize("raw", [None, "", "  ", 42])
    def test_missing_payload(self, raw):
        result = parse_changes_payload(raw)

        assert result.errors == ["changes must be a JSON array string"]

    def test_not_an_array(self):
        result = parse_changes_payload('{"productId": "x"}')

        assert result.errors == ["changes must be a JSON array"]

    def test_invalid_json(self):
        result = parse_changes_payload("[{")

        assert result.success is False
        assert result.errors[0].startswith("invalid JSON")

    def test_invalid_elements_reported_by_index(self):
        raw = json.dumps([
            {"productId": "p", "variantId": "v", "newPrice": 10},
            "nope",
            {"productId": "", "variantId": "v", "newPrice": 10},
            {"productId": "p", "variantId": "v", "newPrice": "10"},
            {"productId": "p", "variantId": "v", "newPrice": True},
        ])

        result = parse_changes_payload(raw)

        assert len(result.changes) == 1
        assert result.errors == [
            "[1] expected object",
            "[2] productId must be a non-empty string",
            "[3] newPrice must be a finite number",
            "[4] newPrice must be a finite number",
        ]

    def test_serialize_is_readable_by_parser(self):
        changes = [ChangeRecord(product_id="p", variant_id="v", new_price=12.5)]

        body = serialize_changes(changes)

        assert json.loads(body["changes"]) == [{"productId": "p", "variantId": "v", "newPrice": 12.5}]
        assert parse_changes_payload(body["changes"]).changes == changes
