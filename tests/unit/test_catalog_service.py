"""
Unit tests for CatalogService and payload flattening.

Run: pytest tests/unit/test_catalog_service.py -v
"""

import pytest
from unittest.mock import MagicMock

from services.catalog_service import CatalogService, flatten_collections
from exceptions import CollectionNotFoundError, ShopifyError
from tests.factories import ShopifyPayloadFactory as P


def weight(value: str) -> list[dict]:
    return [{"name": "Weight", "value": value}]


@pytest.fixture
def shopify_data() -> dict:
    return P.data([
        P.collection("gid://shopify/Collection/gold", "Gold 24K", [
            P.product("gid://shopify/Product/100", "Gold Chain", [
                P.variant("gid://shopify/ProductVariant/1001", "5000.00", options=weight("10g")),
                P.variant("gid://shopify/ProductVariant/1002", "7500.00", "Long",
                          options=[{"name": "Length", "value": "24in"}, *weight("15 g")]),
            ]),
            P.product("gid://shopify/Product/101", "Gold Box", [
                P.variant("gid://shopify/ProductVariant/1011", None, options=[{"name": "Size", "value": "M"}]),
            ]),
            P.product("gid://shopify/Product/102", "Draft Ring", []),
        ]),
        P.collection("gid://shopify/Collection/empty", "Diamond Studio", []),
    ])


@pytest.fixture
def mock_client(shopify_data) -> MagicMock:
    client = MagicMock()
    client.fetch_collections.return_value = shopify_data
    return client


class TestFlattenCollections:
    """Tests for flatten_collections()"""

    def test_rows_per_variant(self, shopify_data):
        gold, empty = flatten_collections(shopify_data)

        assert gold.id == "gid://shopify/Collection/gold"
        assert [r.variant_id for r in gold.products] == [
            "gid://shopify/ProductVariant/1001",
            "gid://shopify/ProductVariant/1002",
            "gid://shopify/ProductVariant/1011",
        ]
        assert empty.products == ()

    def test_row_fields(self, shopify_data):
        row = flatten_collections(shopify_data)[0].products[1]

        assert row.id == "gid://shopify/Product/100::gid://shopify/ProductVariant/1002"
        assert row.product_id == "gid://shopify/Product/100"
        assert row.title == "Gold Chain"
        assert row.variant_title == "Long"
        assert row.base_price == 7500.0
        assert row.weight_grams == 15.0

    def test_missing_price_and_weight(self, shopify_data):
        box = flatten_collections(shopify_data)[0].products[2]

        assert box.base_price == 0.0
        assert box.weight_grams is None
        assert box.has_weight is False

    def test_product_without_variants_contributes_nothing(self, shopify_data):
        gold = flatten_collections(shopify_data)[0]

        assert "gid://shopify/Product/102" not in {r.product_id for r in gold.products}

    @pytest.mark.parametrize("data", [None, {}, {"collections": None}, {"collections": {"edges": "x"}}])
    def test_malformed_payload_gives_no_collections(self, data):
        assert flatten_collections(data) == []


class TestCatalogService:
    """Tests for CatalogService"""

    def test_load_fetches_once(self, mock_client):
        catalog = CatalogService(client_factory=lambda: mock_client, page_size=25)

        first = catalog.load()
        second = catalog.load()

        assert first == second
        assert catalog.loaded is True
        mock_client.fetch_collections.assert_called_once_with(first=25)

    def test_refresh_fetches_again(self, mock_client):
        catalog = CatalogService(client_factory=lambda: mock_client)
        catalog.load()

        catalog.refresh()

        assert mock_client.fetch_collections.call_count == 2

    def test_collection_ids_in_api_order(self, mock_client):
        catalog = CatalogService(client_factory=lambda: mock_client)

        assert catalog.collection_ids() == [
            "gid://shopify/Collection/gold",
            "gid://shopify/Collection/empty",
        ]

    def test_get_unknown_collection(self, mock_client):
        catalog = CatalogService(client_factory=lambda: mock_client)

        with pytest.raises(CollectionNotFoundError) as exc_info:
            catalog.get("gid://shopify/Collection/404")

        assert exc_info.value.status_code == 404

    def test_shopify_failure_propagates(self, mock_client):
        mock_client.fetch_collections.side_effect = ShopifyError("Shopify request failed: timeout")
        catalog = CatalogService(client_factory=lambda: mock_client)

        with pytest.raises(ShopifyError):
            catalog.load()

        assert catalog.loaded is False
