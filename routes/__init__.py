"""
API route modules.

Each module defines routes for one area of the price manager.
"""

from routes.collections import router as collections_router
from routes.selection import router as selection_router
from routes.pricing import router as pricing_router
from routes.price_updates import router as price_updates_router

__all__ = [
    "collections_router",
    "selection_router",
    "pricing_router",
    "price_updates_router",
]
