"""
Custom exception classes for the application.

Every error carries a stable code, a human-readable message (shown to the
merchant as a notice) and the HTTP status used by the routes.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "COLLECTION_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# CATALOG ERRORS
# ===================

class CollectionNotFoundError(NotFoundError):
    """Collection is not part of the loaded catalog."""

    def __init__(self, collection_id: str):
        super().__init__(
            resource="Collection",
            identifier=collection_id,
            code="COLLECTION_NOT_FOUND"
        )


class ShopifyError(ExternalServiceError):
    """Shopify Admin API call failed."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            service="shopify",
            message=message,
            details=details
        )


# ===================
# PRICING ERRORS
# ===================

class InvalidRateError(ValidationError):
    """Rate per gram is missing, non-numeric or not positive."""

    def __init__(self, provided: Any, reason: str = "Enter a valid positive rate."):
        super().__init__(
            code="PRICING_INVALID_RATE",
            message=reason,
            details={"provided": provided}
        )


class InvalidPricingError(ValidationError):
    """Some selected collections have no usable rate."""

    def __init__(self, collection_ids: list[str]):
        super().__init__(
            code="PRICING_INCOMPLETE",
            message="Set a rate for every selected collection before updating prices.",
            details={"collection_ids": collection_ids}
        )


# ===================
# SELECTION ERRORS
# ===================

class EmptySelectionError(ValidationError):
    """Confirming a selection that has no collections."""

    def __init__(self):
        super().__init__(
            code="SELECTION_EMPTY",
            message="Select a collection first."
        )


class SelectionNotConfirmedError(ValidationError):
    """Action needs a locked selection."""

    def __init__(self):
        super().__init__(
            code="SELECTION_NOT_CONFIRMED",
            message="Confirm the collection selection first."
        )


# ===================
# PRICE UPDATE ERRORS
# ===================

class NoVariantsError(ValidationError):
    """Selected collections contain no variants."""

    def __init__(self):
        super().__init__(
            code="PRICE_UPDATE_NO_VARIANTS",
            message="No variants found in selected collections."
        )


class InvalidChangesPayloadError(ValidationError):
    """Serialized change set could not be parsed."""

    def __init__(self, errors: list[str]):
        super().__init__(
            code="PRICE_UPDATE_INVALID_PAYLOAD",
            message=f"Change set is invalid ({len(errors)} errors)",
            details={"errors": errors}
        )
