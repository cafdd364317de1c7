"""
Pricing schemas: per-collection rate configuration and rate cards.
"""

from pydantic import Field
from typing import Optional, Union
from enum import Enum

from models.base import BaseSchema


class PricingConfig(BaseSchema):
    """
    Rate per gram and markup for one collection.

    A config is usable for price updates only when rate_per_gram > 0.
    """

    rate_per_gram: float = Field(0, description="Metal rate per gram")
    percent: float = Field(0, description="Markup (positive) or discount (negative) percent")

    @property
    def is_valid(self) -> bool:
        return self.rate_per_gram > 0


class PricingUpdate(BaseSchema):
    """
    Save pricing for a collection.

    Values arrive as typed in the form, so text is accepted and parsed by
    the pricing store.
    """

    rate: Union[float, str, None] = Field(None, description="Rate per gram")
    percent: Union[float, str, None] = Field(None, description="Markup percent")


class PricingMapResponse(BaseSchema):
    """Full persisted mapping."""

    data: dict[str, PricingConfig]
    total: int


class MetalTheme(str, Enum):
    """Card theme derived from the collection title."""
    GOLD = "gold"
    SILVER = "silver"
    PLATINUM = "platinum"
    DIAMOND = "diamond"
    DEFAULT = "default"


class RateCard(BaseSchema):
    """Rate card for a selected collection."""

    collection_id: str
    title: str
    rate_per_gram: float
    percent: float
    markup_label: str
    is_invalid: bool
    metal: MetalTheme
    hint: Optional[str] = None
