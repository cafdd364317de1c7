"""
Catalog schemas: collections and their flattened product/variant rows.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, FrozenSchema


class SelectedOption(FrozenSchema):
    """One variant option, e.g. {name: "Weight", value: "10g"}."""

    name: str
    value: str


class VariantRow(FrozenSchema):
    """
    One sellable variant, flattened with its product.

    weight_grams is None when the variant options carry no parsable weight;
    such rows keep their current price.
    """

    id: str = Field(..., description="Composite '<productId>::<variantId>'")
    product_id: str = Field(..., description="Product GID")
    variant_id: str = Field(..., description="Variant GID")
    title: str = Field(..., description="Product title")
    variant_title: str = Field(..., description="Variant title")
    base_price: float = Field(..., ge=0, description="Current price")
    weight_grams: Optional[float] = Field(None, gt=0, description="Weight in grams")

    @property
    def has_weight(self) -> bool:
        return self.weight_grams is not None


class Collection(FrozenSchema):
    """A catalog collection with its variant rows."""

    id: str = Field(..., description="Collection GID")
    title: str = Field(..., description="Collection title")
    products: tuple[VariantRow, ...] = Field(default_factory=tuple)

    @property
    def variant_count(self) -> int:
        return len(self.products)


class CollectionSummary(BaseSchema):
    """Aggregate counts used to gate submission."""

    total_collections: int = 0
    total_products: int = Field(0, description="Variant rows across the collections")
    weighted_variants: int = 0
    unweighted_variants: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total_products == 0


class CollectionListResponse(BaseSchema):
    """Catalog listing."""

    data: list[Collection]
    summary: CollectionSummary
