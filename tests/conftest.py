"""Shared fixtures."""

from decimal import Decimal

import pytest

from shop.catalog.memory import InMemoryCatalog
from shop.catalog.service import CatalogService
from shop.domain.entities import ProductDraft


@pytest.fixture
def memory_catalog() -> InMemoryCatalog:
    """Create an empty in-memory catalog."""
    return InMemoryCatalog()


@pytest.fixture
def service(memory_catalog: InMemoryCatalog) -> CatalogService:
    """Create catalog service over the in-memory stores."""
    return CatalogService(memory_catalog.categories, memory_catalog.products)


@pytest.fixture
def make_draft():
    """Build product drafts with sensible defaults."""

    def _make(category_id: int, **overrides) -> ProductDraft:
        fields = {
            "name": "Test",
            "price": Decimal("10.0"),
            "quantity": 1,
            "category_id": category_id,
        }
        fields.update(overrides)
        return ProductDraft(**fields)

    return _make
