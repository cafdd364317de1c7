"""
Text utilities for option names, variant titles and collection titles.
"""

import re
import unicodedata
from typing import Optional

DEFAULT_VARIANT_TITLE = "Default Title"
STANDARD_VARIANT_LABEL = "Standard"

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_label(name: Optional[str]) -> Optional[str]:
    """
    Normalize an option name or title for comparison.

    - "  Weight " → "weight"
    - "Pêso Líquido" → "peso liquido"
    - "GOLD   24K" → "gold 24k"

    Args:
        name: Original label (may have accents, mixed case, odd spacing)

    Returns:
        Lowercase ASCII string with single spaces, or None if input is empty
    """
    if not isinstance(name, str):
        return None

    name = name.strip()

    if not name:
        return None

    # NFD separates base chars from accents; drop the combining marks
    normalized = unicodedata.normalize('NFD', name)
    ascii_name = ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )

    return _WHITESPACE_RE.sub(" ", ascii_name).casefold()


def display_variant_title(title: Optional[str]) -> str:
    """Shopify names the only variant of a product "Default Title"."""
    if not title or title.strip() == DEFAULT_VARIANT_TITLE:
        return STANDARD_VARIANT_LABEL
    return title.strip()
