"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    FrozenSchema,
    Notice,
)
from models.catalog import (
    SelectedOption,
    VariantRow,
    Collection,
    CollectionSummary,
    CollectionListResponse,
)
from models.pricing import (
    PricingConfig,
    PricingUpdate,
    PricingMapResponse,
    MetalTheme,
    RateCard,
)
from models.selection import (
    SelectionPhase,
    SelectionState,
    SelectionResponse,
)
from models.price_update import (
    ChangeRecord,
    ChangeSetRequest,
    UpdateResult,
    PreviewRow,
    PreviewResponse,
    PriceUpdateOutcome,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",
    "Notice",

    # Catalog
    "SelectedOption",
    "VariantRow",
    "Collection",
    "CollectionSummary",
    "CollectionListResponse",

    # Pricing
    "PricingConfig",
    "PricingUpdate",
    "PricingMapResponse",
    "MetalTheme",
    "RateCard",

    # Selection
    "SelectionPhase",
    "SelectionState",
    "SelectionResponse",

    # Price updates
    "ChangeRecord",
    "ChangeSetRequest",
    "UpdateResult",
    "PreviewRow",
    "PreviewResponse",
    "PriceUpdateOutcome",
]
