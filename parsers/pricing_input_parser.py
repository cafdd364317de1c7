"""
Parsers for pricing input.

Rates and percents come from free-text form fields; the pricing mapping
comes back from storage as JSON. Every function here reports problems in
its result instead of raising.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
import json
import math

from models.pricing import PricingConfig


@dataclass
class NumberParseResult:
    """Result of parsing one numeric form field."""
    value: Optional[float] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None and self.value is not None


@dataclass
class PricingStateParseResult:
    """Result of parsing the persisted pricing mapping."""
    entries: dict[str, PricingConfig] = field(default_factory=dict)
    error: Optional[str] = None
    dropped_keys: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when the document itself was readable (dropped entries are not fatal)."""
        return self.error is None


def to_number(raw: Any) -> Optional[float]:
    """
    Convert a form value to a finite float.

    Accepts ints, floats and numeric text (surrounding whitespace allowed).
    Returns None for blanks, bools, non-numeric text, NaN and infinity.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        number = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def parse_rate(raw: Any) -> NumberParseResult:
    """
    Parse a rate per gram. Must be a number greater than zero.

    Args:
        raw: Value typed by the merchant ("6000", 6000, "0"...)

    Returns:
        NumberParseResult with value, or error "Enter a valid positive rate."
    """
    number = to_number(raw)
    if number is None or number <= 0:
        return NumberParseResult(error="Enter a valid positive rate.")
    return NumberParseResult(value=number)


def parse_percent(raw: Any) -> float:
    """Parse a markup percent; anything non-numeric counts as 0."""
    number = to_number(raw)
    return 0.0 if number is None else number


def parse_pricing_state(raw: Optional[str]) -> PricingStateParseResult:
    """
    Parse the persisted mapping {"<collectionId>": {"ratePerGram": n, "percent": n}}.

    Absent, unreadable or non-object documents give an empty mapping with
    an error. Entries without a numeric ratePerGram are dropped; a missing
    or non-numeric percent reads as 0.
    """
    if raw is None or raw == "":
        return PricingStateParseResult()

    try:
        document = json.loads(raw)
    except (TypeError, ValueError) as e:
        return PricingStateParseResult(error=f"invalid JSON: {e}")

    if not isinstance(document, dict):
        return PricingStateParseResult(error=f"expected object, got {type(document).__name__}")

    result = PricingStateParseResult()
    for key, entry in document.items():
        if not isinstance(entry, dict):
            result.dropped_keys.append(key)
            continue

        rate = to_number(entry.get("ratePerGram"))
        if rate is None:
            result.dropped_keys.append(key)
            continue

        result.entries[key] = PricingConfig(
            rate_per_gram=rate,
            percent=parse_percent(entry.get("percent")),
        )

    return result


def dump_pricing_state(entries: dict[str, PricingConfig]) -> str:
    """Serialize the mapping in the same shape parse_pricing_state() reads."""
    return json.dumps(
        {key: config.model_dump(by_alias=True) for key, config in entries.items()},
        ensure_ascii=False,
    )
