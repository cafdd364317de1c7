"""
Shopify Admin GraphQL API integration.

Loads collections with their products and variants, and pushes variant
price updates with productVariantsBulkUpdate.
"""

from typing import Any, Optional
import requests
import structlog

from config import settings
from exceptions import ShopifyError

logger = structlog.get_logger(__name__)


COLLECTIONS_QUERY = """
query CollectionsWithProducts($first: Int!) {
  collections(first: $first) {
    edges {
      node {
        id
        title
        handle
        products(first: $first) {
          edges {
            node {
              id
              title
              handle
              status
              variants(first: $first) {
                edges {
                  node {
                    id
                    title
                    price
                    selectedOptions { name value }
                  }
                }
              }
            }
          }
        }
      }
    }
  }
}
"""

PRODUCT_VARIANTS_BULK_UPDATE = """
mutation productVariantsBulkUpdate($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
  productVariantsBulkUpdate(productId: $productId, variants: $variants) {
    productVariants {
      id
      price
    }
    userErrors {
      field
      message
    }
  }
}
"""


class ShopifyClient:
    """
    Minimal Admin API client.

    Usage:
        client = ShopifyClient("my-store.myshopify.com", token)
        data = client.fetch_collections(first=50)
    """

    def __init__(
        self,
        shop: str,
        access_token: str,
        api_version: str = "2025-01",
        session: Optional[requests.Session] = None,
        timeout: int = 30
    ):
        self.shop = shop
        self.access_token = access_token
        self.api_version = api_version
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def graphql_url(self) -> str:
        return f"https://{self.shop}/admin/api/{self.api_version}/graphql.json"

    def execute(self, query: str, variables: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Run a GraphQL document and return its "data" object.

        Raises:
            ShopifyError: Transport failure, HTTP error or top-level GraphQL errors
        """
        headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self.access_token,
        }

        try:
            response = self.session.post(
                self.graphql_url,
                headers=headers,
                json={"query": query, "variables": variables or {}},
                timeout=self.timeout
            )
            response.raise_for_status()
            payload = response.json()

        except requests.exceptions.RequestException as e:
            logger.error("shopify_request_failed", shop=self.shop, error=str(e))
            raise ShopifyError(f"Shopify request failed: {e}")
        except ValueError as e:
            logger.error("shopify_invalid_json", shop=self.shop, error=str(e))
            raise ShopifyError("Shopify returned invalid JSON")

        if isinstance(payload.get("errors"), list) and payload["errors"]:
            messages = [str(err.get("message", err)) if isinstance(err, dict) else str(err)
                        for err in payload["errors"]]
            logger.error("shopify_graphql_errors", shop=self.shop, errors=messages)
            raise ShopifyError("Shopify GraphQL errors", {"errors": messages})

        data = payload.get("data")
        if not isinstance(data, dict):
            raise ShopifyError("Unexpected Shopify response: missing data")

        return data

    def fetch_collections(self, first: int = 50) -> dict[str, Any]:
        """Collections → products → variants, first N at each level."""
        logger.info("fetching_shopify_collections", shop=self.shop, first=first)
        return self.execute(COLLECTIONS_QUERY, {"first": first})

    def update_variant_prices(self, product_id: str, variants: list[dict[str, str]]) -> dict[str, Any]:
        """
        Update prices of some variants of one product.

        Args:
            product_id: Product GID
            variants: [{"id": variant GID, "price": "123.45"}]

        Returns:
            The productVariantsBulkUpdate payload (productVariants, userErrors)
        """
        logger.info(
            "updating_shopify_variant_prices",
            product_id=product_id,
            count=len(variants)
        )
        data = self.execute(
            PRODUCT_VARIANTS_BULK_UPDATE,
            {"productId": product_id, "variants": variants}
        )
        return data.get("productVariantsBulkUpdate") or {}


def get_shopify_client() -> ShopifyClient:
    """
    Build a client from settings.

    Raises:
        ShopifyError: If SHOPIFY_SHOP or SHOPIFY_ACCESS_TOKEN is missing
    """
    if not settings.shopify_configured:
        logger.warning(
            "shopify_not_configured",
            has_shop=bool(settings.shopify_shop),
            has_token=bool(settings.shopify_access_token)
        )
        raise ShopifyError("SHOPIFY_SHOP and SHOPIFY_ACCESS_TOKEN must be set")

    return ShopifyClient(
        settings.shopify_shop,
        settings.shopify_access_token,
        settings.shopify_api_version
    )
