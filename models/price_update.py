"""
Price update schemas: change records, preview rows and update outcomes.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime

from models.base import BaseSchema, FrozenSchema, Notice
from models.catalog import CollectionSummary


class ChangeRecord(FrozenSchema):
    """
    One variant price change.

    Wire shape: {"productId": str, "variantId": str, "newPrice": number}.
    """

    product_id: str
    variant_id: str
    new_price: float = Field(..., allow_inf_nan=False)


class ChangeSetRequest(BaseSchema):
    """Serialized change set: a JSON array under a single field."""

    changes: str = Field(..., description="JSON array of change records")


class UpdateResult(BaseSchema):
    """Outcome reported by the remote price updater."""

    ok: bool
    updated: int = Field(0, ge=0)
    errors: list[str] = Field(default_factory=list)


class PreviewRow(BaseSchema):
    """One row of the price preview table."""

    collection_id: str
    collection_title: str
    product_id: str
    variant_id: str
    product_title: str
    variant_title: str
    weight_grams: Optional[float] = None
    rate_per_gram: float
    percent: float
    markup_label: str
    current_price: float
    new_price: float = Field(..., allow_inf_nan=False)
    current_price_label: str
    new_price_label: str
    group_key: str
    is_group_head: bool
    will_change: bool


class PreviewResponse(BaseSchema):
    """Price preview for the locked selection."""

    data: list[PreviewRow]
    summary: CollectionSummary
    change_count: int
    invalid_collection_ids: list[str]
    last_updated: datetime


class PriceUpdateOutcome(BaseSchema):
    """What happened when the merchant pressed Update Prices."""

    submitted: bool
    change_count: int
    ok: bool
    updated: int = 0
    notice: Notice
    last_updated: datetime
