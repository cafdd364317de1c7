"""
Catalog service.

Loads collections from Shopify and flattens each product's variants into
VariantRows. The catalog is loaded once and kept for the session.
"""

from typing import Any, Callable, Optional
import structlog

from config import settings
from integrations.shopify import ShopifyClient, get_shopify_client
from models.catalog import Collection, VariantRow
from parsers.pricing_input_parser import to_number
from parsers.weight_parser import parse_weight
from exceptions import CollectionNotFoundError

logger = structlog.get_logger(__name__)


def _edges(connection: Any) -> list[dict]:
    """Nodes of a GraphQL connection; tolerates missing levels."""
    if not isinstance(connection, dict):
        return []
    edges = connection.get("edges")
    if not isinstance(edges, list):
        return []
    return [edge["node"] for edge in edges if isinstance(edge, dict) and isinstance(edge.get("node"), dict)]


def _flatten_product(product: dict) -> list[VariantRow]:
    product_id = product.get("id")
    if not product_id:
        return []

    rows = []
    for variant in _edges(product.get("variants")):
        variant_id = variant.get("id")
        if not variant_id:
            continue

        price = to_number(variant.get("price"))
        rows.append(VariantRow(
            id=f"{product_id}::{variant_id}",
            product_id=product_id,
            variant_id=variant_id,
            title=product.get("title") or "",
            variant_title=variant.get("title") or "",
            base_price=price if price is not None and price > 0 else 0.0,
            weight_grams=parse_weight(variant.get("selectedOptions") or [])
        ))
    return rows


def flatten_collections(data: Optional[dict]) -> list[Collection]:
    """
    Turn the CollectionsWithProducts query result into Collections.

    Products without variants contribute no rows. Missing or unparsable
    prices read as 0.

    Args:
        data: The "data" object of the GraphQL response

    Returns:
        Collections in API order
    """
    collections = []
    for node in _edges((data or {}).get("collections")):
        if not node.get("id"):
            continue
        rows: list[VariantRow] = []
        for product in _edges(node.get("products")):
            rows.extend(_flatten_product(product))
        collections.append(Collection(
            id=node["id"],
            title=node.get("title") or "",
            products=tuple(rows)
        ))
    return collections


class CatalogService:
    """
    Session catalog.

    Usage:
        catalog = CatalogService()
        collections = catalog.load()
    """

    def __init__(self, client_factory: Callable[[], ShopifyClient] = get_shopify_client, page_size: Optional[int] = None):
        self.client_factory = client_factory
        self.page_size = page_size or settings.catalog_page_size
        self._collections: Optional[list[Collection]] = None

    @property
    def loaded(self) -> bool:
        return self._collections is not None

    def load(self) -> list[Collection]:
        """
        Load the catalog on first use.

        Raises:
            ShopifyError: If the Admin API call fails
        """
        if self._collections is None:
            self.refresh()
        return list(self._collections)

    def refresh(self) -> list[Collection]:
        """Reload the catalog from Shopify."""
        client = self.client_factory()
        data = client.fetch_collections(first=self.page_size)
        self._collections = flatten_collections(data)

        logger.info(
            "catalog_loaded",
            collections=len(self._collections),
            variants=sum(c.variant_count for c in self._collections)
        )
        return list(self._collections)

    def collection_ids(self) -> list[str]:
        return [c.id for c in self.load()]

    def get(self, collection_id: str) -> Collection:
        """
        Raises:
            CollectionNotFoundError: Id not in the loaded catalog
        """
        for collection in self.load():
            if collection.id == collection_id:
                return collection
        raise CollectionNotFoundError(collection_id)
