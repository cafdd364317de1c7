"""
Price preview and update routes.
"""

from fastapi import APIRouter
import structlog

from models.price_update import (
    ChangeSetRequest,
    UpdateResult,
    PreviewResponse,
    PriceUpdateOutcome,
)
from parsers.change_set_parser import parse_changes_payload
from services.price_manager_service import get_price_manager_service
from exceptions import InvalidChangesPayloadError
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/preview", response_model=PreviewResponse)
def get_preview():
    """
    Computed prices for the locked selection.

    Raises:
        422: Selection not confirmed
    """
    try:
        return get_price_manager_service().preview()
    except Exception as e:
        return handle_error(e)


@router.post("/price-updates/apply", response_model=PriceUpdateOutcome)
def apply_price_updates():
    """
    Build the change set and submit it to Shopify.

    Raises:
        422: Selection not confirmed, missing rates, or no variants
    """
    try:
        return get_price_manager_service().apply_prices()
    except Exception as e:
        return handle_error(e)


@router.post("/price-updates", response_model=UpdateResult)
def submit_price_updates(data: ChangeSetRequest):
    """
    Apply an already-built change set.

    Body: {"changes": "[{\\"productId\\": ..., \\"variantId\\": ..., \\"newPrice\\": ...}]"}

    Raises:
        422: Payload is not a valid change set
    """
    try:
        result = parse_changes_payload(data.changes)
        if not result.success:
            raise InvalidChangesPayloadError(result.errors)

        logger.info("change_set_received", changes=len(result.changes))
        return get_price_manager_service().updater.apply(result.changes)
    except Exception as e:
        return handle_error(e)
