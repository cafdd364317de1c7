"""
Weight-based price calculation.

Formula:
    base  = weight_grams × rate_per_gram
    final = base × (1 + percent / 100)

compute_price() returns the unrounded value. Rounding to currency units
happens only when comparing prices or showing them.
"""

from decimal import Decimal, ROUND_HALF_UP
import math

CENT = Decimal("0.01")


def compute_price(weight_grams: float, rate_per_gram: float, percent: float) -> float:
    """
    Price of a variant from its weight and the collection's rate.

    Args:
        weight_grams: Variant weight in grams
        rate_per_gram: Metal rate per gram
        percent: Markup (positive) or discount (negative) percent

    Returns:
        Final price, not rounded and not clamped
    """
    base = weight_grams * rate_per_gram
    if percent == 0:
        return base
    return base * (1 + percent / 100)


def clamp_price(price: float, clamp_negative: bool) -> float:
    """Apply the optional non-negative price policy."""
    if clamp_negative and price < 0:
        return 0.0
    return price


def to_decimal(value: float) -> Decimal:
    """Decimal of the float's shortest repr, so 5000.01 stays 5000.01."""
    return Decimal(repr(float(value)))


def price_delta(new_price: float, current_price: float) -> Decimal:
    """Absolute difference between two prices in exact decimal arithmetic."""
    return abs(to_decimal(new_price) - to_decimal(current_price))


def exceeds_dead_band(new_price: float, current_price: float, dead_band: float) -> bool:
    """True when the difference is strictly greater than the dead band."""
    return price_delta(new_price, current_price) > to_decimal(dead_band)


def round_currency(value: float) -> Decimal:
    """
    Round half-up to 2 decimals.

    Raises:
        ValueError: value is NaN or infinite
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite price: {value!r}")
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_price(value: float, symbol: str = "₹") -> str:
    """₹60,000.00 style display string."""
    amount = round_currency(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_markup(percent: float) -> str:
    """"+10%", "-5%", "0%"; integral values shown without decimals."""
    number = int(percent) if float(percent).is_integer() else percent
    if percent > 0:
        return f"+{number}%"
    return f"{number}%"
