"""
Business logic services.

Each service handles one concern of the price manager.
"""

from services.price_calculator import compute_price
from services.collection_summary_service import summarize
from services.pricing_store_service import PricingStore
from services.selection_service import SelectionStateMachine, TransitionResult
from services.change_set_service import build_changes, build_preview
from services.catalog_service import CatalogService, flatten_collections
from services.price_update_service import PriceUpdateService, get_price_update_service
from services.price_manager_service import (
    PriceManagerService,
    get_price_manager_service,
    set_price_manager_service,
)

__all__ = [
    "compute_price",
    "summarize",
    "PricingStore",
    "SelectionStateMachine",
    "TransitionResult",
    "build_changes",
    "build_preview",
    "CatalogService",
    "flatten_collections",
    "PriceUpdateService",
    "get_price_update_service",
    "PriceManagerService",
    "get_price_manager_service",
    "set_price_manager_service",
]
