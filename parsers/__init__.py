"""
Parsers for variant options, form input and serialized payloads.
"""

from parsers.weight_parser import (
    parse_weight,
    is_weight_label,
)
from parsers.pricing_input_parser import (
    parse_rate,
    parse_percent,
    parse_pricing_state,
    dump_pricing_state,
    NumberParseResult,
    PricingStateParseResult,
)
from parsers.change_set_parser import (
    parse_changes_payload,
    serialize_changes,
    ChangesPayloadParseResult,
)

__all__ = [
    "parse_weight",
    "is_weight_label",
    "parse_rate",
    "parse_percent",
    "parse_pricing_state",
    "dump_pricing_state",
    "NumberParseResult",
    "PricingStateParseResult",
    "parse_changes_payload",
    "serialize_changes",
    "ChangesPayloadParseResult",
]
