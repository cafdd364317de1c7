"""
Remote price updater.

Pushes a change set to Shopify, one productVariantsBulkUpdate per product,
and reports {ok, updated}. Failures are reported, not retried.
"""

from typing import Callable, Optional
import structlog

from integrations.shopify import ShopifyClient, get_shopify_client
from models.price_update import ChangeRecord, UpdateResult
from services.price_calculator import round_currency
from exceptions import ExternalServiceError

logger = structlog.get_logger(__name__)


def group_by_product(changes: list[ChangeRecord]) -> dict[str, list[ChangeRecord]]:
    """Changes keyed by product id, in first-seen order."""
    grouped: dict[str, list[ChangeRecord]] = {}
    for change in changes:
        grouped.setdefault(change.product_id, []).append(change)
    return grouped


class PriceUpdateService:
    """
    Applies change sets through the Shopify Admin API.

    Every product is attempted even when an earlier one fails; the result
    is ok only when all of them succeeded.
    """

    def __init__(self, client_factory: Callable[[], ShopifyClient] = get_shopify_client):
        self.client_factory = client_factory

    def apply(self, changes: list[ChangeRecord]) -> UpdateResult:
        """
        Submit a change set.

        Args:
            changes: Records from build_changes()

        Returns:
            UpdateResult with the number of variants Shopify confirmed

        Raises:
            ShopifyError: If the client cannot be built (not configured)
        """
        if not changes:
            return UpdateResult(ok=True, updated=0)

        client = self.client_factory()
        grouped = group_by_product(changes)
        updated = 0
        errors: list[str] = []

        logger.info("price_update_started", products=len(grouped), variants=len(changes))

        for product_id, product_changes in grouped.items():
            variants = [
                {"id": c.variant_id, "price": str(round_currency(c.new_price))}
                for c in product_changes
            ]
            try:
                payload = client.update_variant_prices(product_id, variants)
            except ExternalServiceError as e:
                errors.append(f"{product_id}: {e.message}")
                continue

            user_errors = payload.get("userErrors") or []
            for err in user_errors:
                errors.append(f"{product_id}: {err.get('message', err) if isinstance(err, dict) else err}")

            updated += len(payload.get("productVariants") or [])

        result = UpdateResult(ok=not errors, updated=updated, errors=errors)

        if result.ok:
            logger.info("price_update_complete", updated=updated)
        else:
            logger.warning("price_update_partial_failure", updated=updated, errors=errors)

        return result


# Singleton instance for convenience
_price_update_service: Optional[PriceUpdateService] = None


def get_price_update_service() -> PriceUpdateService:
    """Get or create PriceUpdateService instance."""
    global _price_update_service
    if _price_update_service is None:
        _price_update_service = PriceUpdateService()
    return _price_update_service
