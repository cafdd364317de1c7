"""
Variant weight parser.

Reads the weight in grams from a variant's selected options, e.g.
[{"name": "Weight", "value": "10.5 g"}] → 10.5.
"""

import math
import re
from typing import Any, Iterable, Optional

from utils.text_utils import normalize_label

# Option names treated as a weight, after normalize_label()
WEIGHT_LABELS = frozenset({"weight", "wt", "grams", "gram", "gms", "gm", "g"})

_WEIGHT_WORD_RE = re.compile(r"\bweight\b")
_LEADING_NUMBER_RE = re.compile(r"^\s*(\d+(?:\.\d*)?|\.\d+)")


def is_weight_label(name: Any) -> bool:
    """True for "Weight", "grams", "g", "Gold Weight", "Weight (g)"..."""
    label = normalize_label(name)
    if label is None:
        return False
    return label in WEIGHT_LABELS or bool(_WEIGHT_WORD_RE.search(label))


def parse_leading_number(value: Any) -> Optional[float]:
    """
    Extract the leading number of an option value.

    "10g" → 10.0, " 2.5 grams" → 2.5, "approx 3g" → None.
    Numbers pass through; bools and non-finite values are rejected.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER_RE.match(value)
        if not match:
            return None
        try:
            number = float(match.group(1))
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def parse_weight(options: Optional[Iterable[Any]]) -> Optional[float]:
    """
    Find the weight option and return its value in grams.

    Args:
        options: Variant selected options, each {"name": ..., "value": ...}
            (dicts or objects with name/value attributes)

    Returns:
        Positive weight in grams from the first weight option with a usable
        value, or None when there is none. Never raises.
    """
    if options is None or isinstance(options, (str, bytes, dict)):
        return None

    try:
        entries = list(options)
    except TypeError:
        return None

    for entry in entries:
        if isinstance(entry, dict):
            name, value = entry.get("name"), entry.get("value")
        else:
            name, value = getattr(entry, "name", None), getattr(entry, "value", None)

        if not is_weight_label(name):
            continue

        weight = parse_leading_number(value)
        if weight is None or weight <= 0:
            continue
        return weight

    return None
