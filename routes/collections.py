"""
Collection catalog routes.
"""

from fastapi import APIRouter
import structlog

from models.catalog import CollectionListResponse
from services.price_manager_service import get_price_manager_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=CollectionListResponse)
def list_collections():
    """
    List catalog collections with their variant rows.

    The first call loads the catalog from Shopify.
    """
    try:
        service = get_price_manager_service()
        return CollectionListResponse(
            data=service.collections(),
            summary=service.catalog_summary()
        )
    except Exception as e:
        return handle_error(e)


@router.post("/refresh", response_model=CollectionListResponse)
def refresh_collections():
    """Reload the catalog and add default pricing for new collections."""
    try:
        service = get_price_manager_service()
        collections = service.refresh_catalog()
        return CollectionListResponse(
            data=collections,
            summary=service.catalog_summary()
        )
    except Exception as e:
        return handle_error(e)
