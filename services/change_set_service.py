"""
Change-set and preview building.

Both functions are pure: they read collections and pricing and return new
objects, with no I/O.
"""

from typing import Iterable, Mapping, Optional
import math
import structlog

from models.catalog import Collection, VariantRow
from models.pricing import PricingConfig
from models.price_update import ChangeRecord, PreviewRow
from services.price_calculator import (
    compute_price,
    clamp_price,
    exceeds_dead_band,
    format_markup,
    format_price,
)
from utils.text_utils import display_variant_title

logger = structlog.get_logger(__name__)

PRICE_DEAD_BAND = 0.01
DEFAULT_CURRENCY_SYMBOL = "₹"


def _usable_config(pricing: Mapping[str, PricingConfig], collection_id: str) -> Optional[PricingConfig]:
    config = pricing.get(collection_id)
    if config is None or not config.is_valid:
        return None
    return config


def _formula_price(row: VariantRow, config: PricingConfig, clamp_negative: bool) -> Optional[float]:
    """Computed price for a row; None without a weight or when the result overflows."""
    if row.weight_grams is None:
        return None
    price = clamp_price(
        compute_price(row.weight_grams, config.rate_per_gram, config.percent),
        clamp_negative
    )
    if not math.isfinite(price):
        logger.warning("formula_price_not_finite", variant_id=row.variant_id, rate_per_gram=config.rate_per_gram)
        return None
    return price


def build_changes(
    selected_collections: Iterable[Collection],
    pricing: Mapping[str, PricingConfig],
    dead_band: float = PRICE_DEAD_BAND,
    clamp_negative: bool = False
) -> list[ChangeRecord]:
    """
    Variant price changes worth submitting.

    A row is included when it has a weight, its collection has a valid rate,
    the computed price is finite, and it differs from the current one by
    more than the dead band.

    Args:
        selected_collections: Collections in selection order
        pricing: Collection id → PricingConfig
        dead_band: Largest difference treated as "unchanged"
        clamp_negative: Clamp computed prices at zero

    Returns:
        ChangeRecords in collection order, then row order
    """
    changes: list[ChangeRecord] = []
    skipped_collections: list[str] = []

    for collection in selected_collections:
        config = _usable_config(pricing, collection.id)
        if config is None:
            skipped_collections.append(collection.id)
            continue

        for row in collection.products:
            new_price = _formula_price(row, config, clamp_negative)
            if new_price is None:
                continue

            if exceeds_dead_band(new_price, row.base_price, dead_band):
                changes.append(ChangeRecord(
                    product_id=row.product_id,
                    variant_id=row.variant_id,
                    new_price=new_price
                ))

    logger.debug(
        "change_set_built",
        changes=len(changes),
        skipped_collections=skipped_collections
    )
    return changes


def group_key(row: VariantRow) -> str:
    """Variants of one product with the same weight share a computed price."""
    return f"{row.product_id}-{row.weight_grams}"


def _group_rows(rows: Iterable[VariantRow]) -> list[list[VariantRow]]:
    groups: dict[str, list[VariantRow]] = {}
    for row in rows:
        groups.setdefault(group_key(row), []).append(row)
    return list(groups.values())


def build_preview(
    selected_collections: Iterable[Collection],
    pricing: Mapping[str, PricingConfig],
    dead_band: float = PRICE_DEAD_BAND,
    clamp_negative: bool = False,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
) -> list[PreviewRow]:
    """
    Rows for the price preview table.

    Rows of a collection are grouped by (product, weight) in first-seen
    order. The group's new price comes from its first row; rows without a
    weight, or whose computed price overflows, keep their current price. Missing configs read as {0, 0}.
    Prices are also given as display labels in currency_symbol.
    """
    preview: list[PreviewRow] = []

    for collection in selected_collections:
        config = pricing.get(collection.id) or PricingConfig()
        markup_label = format_markup(config.percent)

        for group in _group_rows(collection.products):
            head = group[0]
            formula_price = _formula_price(head, config, clamp_negative)
            new_price = head.base_price if formula_price is None else formula_price

            for index, row in enumerate(group):
                will_change = (
                    formula_price is not None
                    and config.is_valid
                    and exceeds_dead_band(new_price, row.base_price, dead_band)
                )
                preview.append(PreviewRow(
                    collection_id=collection.id,
                    collection_title=collection.title,
                    product_id=row.product_id,
                    variant_id=row.variant_id,
                    product_title=row.title,
                    variant_title=display_variant_title(row.variant_title),
                    weight_grams=row.weight_grams,
                    rate_per_gram=config.rate_per_gram,
                    percent=config.percent,
                    markup_label=markup_label,
                    current_price=row.base_price,
                    new_price=new_price,
                    current_price_label=format_price(row.base_price, currency_symbol),
                    new_price_label=format_price(new_price, currency_symbol),
                    group_key=group_key(row),
                    is_group_head=index == 0,
                    will_change=will_change
                ))

    return preview
