"""
Pricing configuration routes.

Collection ids are Shopify GIDs (gid://shopify/Collection/123), so they are
matched as paths.
"""

from fastapi import APIRouter
import structlog

from models.pricing import (
    PricingConfig,
    PricingUpdate,
    PricingMapResponse,
    RateCard,
)
from services.price_manager_service import get_price_manager_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=PricingMapResponse)
def list_pricing():
    """Persisted pricing for every known collection."""
    try:
        data = get_price_manager_service().pricing_map()
        return PricingMapResponse(data=data, total=len(data))
    except Exception as e:
        return handle_error(e)


@router.get("/cards", response_model=list[RateCard])
def list_rate_cards():
    """Rate cards for the selected collections."""
    try:
        return get_price_manager_service().rate_cards()
    except Exception as e:
        return handle_error(e)


@router.get("/{collection_id:path}", response_model=PricingConfig)
def get_pricing(collection_id: str):
    """
    Pricing for one collection ({0, 0} when never set).

    Raises:
        404: Collection not in the catalog
    """
    try:
        return get_price_manager_service().get_pricing(collection_id)
    except Exception as e:
        return handle_error(e)


@router.put("/{collection_id:path}", response_model=PricingConfig)
def save_pricing(collection_id: str, data: PricingUpdate):
    """
    Save rate per gram and markup for one collection.

    Raises:
        404: Collection not in the catalog
        422: Rate is not a positive number
    """
    try:
        return get_price_manager_service().save_pricing(collection_id, data.rate, data.percent)
    except Exception as e:
        return handle_error(e)
