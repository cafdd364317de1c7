"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import MagicMock
from typing import Generator

from integrations.key_value_store import InMemoryKeyValueStore
from models.price_update import UpdateResult
from services.catalog_service import CatalogService
from services.price_update_service import PriceUpdateService
from services.pricing_store_service import PricingStore
from services.price_manager_service import PriceManagerService, set_price_manager_service
from tests.factories import CollectionFactory, VariantRowFactory


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods over a shared row list."""

    def __init__(self, rows: list):
        self._rows = rows
        self._filters: list[tuple[str, object]] = []
        self._limit = None
        self._upsert = None

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def upsert(self, data, on_conflict: str = "id"):
        self._upsert = (data, on_conflict)
        return self

    def execute(self) -> MockSupabaseResponse:
        if self._upsert is not None:
            data, key = self._upsert
            for row in self._rows:
                if row.get(key) == data.get(key):
                    row.update(data)
                    break
            else:
                self._rows.append(dict(data))
            return MockSupabaseResponse(data=[data])

        matched = [
            row for row in self._rows
            if all(row.get(column) == value for column, value in self._filters)
        ]
        if self._limit is not None:
            matched = matched[:self._limit]
        return MockSupabaseResponse(data=[dict(row) for row in matched])


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables: dict[str, list] = {}

    def set_table_data(self, table_name: str, data: list):
        """Configure mock rows for a table."""
        self._tables[table_name] = [dict(row) for row in data]

    def rows(self, table_name: str) -> list:
        return self._tables.setdefault(table_name, [])

    def table(self, name: str) -> MockSupabaseQuery:
        return MockSupabaseQuery(self.rows(name))


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("kv_store", [{"key": "k", "value": "v"}])
    """
    return MockSupabaseClient()


# ===================
# STORAGE
# ===================

@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def pricing_store(kv_store) -> PricingStore:
    return PricingStore(kv_store)


# ===================
# CATALOG
# ===================

@pytest.fixture
def gold_collection():
    return CollectionFactory.gold_24k()


@pytest.fixture
def silver_collection():
    return CollectionFactory.create(
        id="gid://shopify/Collection/silver",
        title="Silver 925",
        products=[
            VariantRowFactory.create(
                product_id="gid://shopify/Product/200",
                variant_id="gid://shopify/ProductVariant/2001",
                title="Silver Bangle",
                variant_title="Small",
                base_price=500.0,
                weight_grams=5.0
            ),
            VariantRowFactory.create(
                product_id="gid://shopify/Product/200",
                variant_id="gid://shopify/ProductVariant/2002",
                title="Silver Bangle",
                variant_title="Large",
                base_price=900.0,
                weight_grams=9.0
            ),
            VariantRowFactory.create(
                product_id="gid://shopify/Product/201",
                variant_id="gid://shopify/ProductVariant/2011",
                title="Silver Gift Box",
                variant_title="M",
                base_price=250.0,
                weight_grams=None
            ),
        ]
    )


@pytest.fixture
def empty_collection():
    return CollectionFactory.create(
        id="gid://shopify/Collection/empty",
        title="Diamond Studio",
        products=[]
    )


@pytest.fixture
def sample_catalog(gold_collection, silver_collection, empty_collection) -> list:
    return [gold_collection, silver_collection, empty_collection]


@pytest.fixture
def mock_catalog(sample_catalog) -> MagicMock:
    """CatalogService stand-in serving sample_catalog."""
    catalog = MagicMock(spec=CatalogService)
    catalog.load.return_value = list(sample_catalog)
    catalog.refresh.return_value = list(sample_catalog)
    return catalog


@pytest.fixture
def mock_updater() -> MagicMock:
    """PriceUpdateService stand-in that reports every change applied."""
    updater = MagicMock(spec=PriceUpdateService)
    updater.apply.side_effect = lambda changes: UpdateResult(ok=True, updated=len(changes))
    return updater


@pytest.fixture
def price_manager(mock_catalog, pricing_store, mock_updater) -> PriceManagerService:
    return PriceManagerService(
        catalog=mock_catalog,
        pricing_store=pricing_store,
        updater=mock_updater
    )


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(price_manager) -> Generator:
    """
    FastAPI test client wired to the price_manager fixture.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/collections")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    set_price_manager_service(price_manager)
    try:
        yield TestClient(app)
    finally:
        set_price_manager_service(None)
