"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
    DatabaseError,

    # Catalog
    CollectionNotFoundError,
    ShopifyError,

    # Pricing
    InvalidRateError,
    InvalidPricingError,

    # Selection
    EmptySelectionError,
    SelectionNotConfirmedError,

    # Price updates
    NoVariantsError,
    InvalidChangesPayloadError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "DatabaseError",

    # Catalog
    "CollectionNotFoundError",
    "ShopifyError",

    # Pricing
    "InvalidRateError",
    "InvalidPricingError",

    # Selection
    "EmptySelectionError",
    "SelectionNotConfirmedError",

    # Price updates
    "NoVariantsError",
    "InvalidChangesPayloadError",
]
