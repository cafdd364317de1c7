"""
Collection selection routes.

Membership changes sent while the selection is locked are ignored and
answered with accepted=false.
"""

from fastapi import APIRouter
import structlog

from models.selection import SelectionResponse
from services.price_manager_service import get_price_manager_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=SelectionResponse)
def get_selection():
    """Current phase, selected ids and counts."""
    try:
        return get_price_manager_service().selection_response()
    except Exception as e:
        return handle_error(e)


@router.post("/select-all", response_model=SelectionResponse)
def select_all():
    try:
        return get_price_manager_service().select_all()
    except Exception as e:
        return handle_error(e)


@router.post("/deselect-all", response_model=SelectionResponse)
def deselect_all():
    try:
        return get_price_manager_service().deselect_all()
    except Exception as e:
        return handle_error(e)


@router.post("/toggle-all", response_model=SelectionResponse)
def toggle_all():
    """Select All / Deselect All button."""
    try:
        return get_price_manager_service().toggle_all()
    except Exception as e:
        return handle_error(e)


@router.post("/confirm", response_model=SelectionResponse)
def confirm_selection():
    """
    Lock the selection.

    Raises:
        422: Nothing selected
    """
    try:
        return get_price_manager_service().confirm_selection()
    except Exception as e:
        return handle_error(e)


@router.post("/reselect", response_model=SelectionResponse)
def reselect():
    """Unlock the selection, keeping the chosen collections."""
    try:
        return get_price_manager_service().reselect()
    except Exception as e:
        return handle_error(e)


@router.post("/toggle/{collection_id:path}", response_model=SelectionResponse)
def toggle_collection(collection_id: str):
    """
    Add or remove one collection.

    Raises:
        404: Collection not in the catalog
    """
    try:
        return get_price_manager_service().toggle_collection(collection_id)
    except Exception as e:
        return handle_error(e)
