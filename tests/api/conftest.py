"""Shared fixtures for API tests.

Routes run against a fresh in-memory catalog and a temporary uploads
directory for every test.
"""

from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from shop.api.deps import get_image_store, get_stores
from shop.catalog.memory import InMemoryCatalog
from shop.catalog.stores import CatalogStores
from shop.infrastructure.config import settings
from shop.infrastructure.storage import ImageStore
from shop.main import app


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Uploads directory for the test."""
    return tmp_path / "uploads"


@pytest.fixture(autouse=True)
def override_dependencies(memory_catalog: InMemoryCatalog, upload_dir: Path):
    """Point the app at the test catalog and uploads directory."""

    async def _stores():
        yield CatalogStores.in_memory(memory_catalog)

    app.dependency_overrides[get_stores] = _stores
    app.dependency_overrides[get_image_store] = lambda: ImageStore(upload_dir)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    """Create test client without authentication."""
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Get admin authentication headers."""
    return {"Authorization": f"Bearer {settings.admin_password}"}


@pytest.fixture
def auth_client(auth_headers: dict[str, str]) -> TestClient:
    """Create test client with valid admin credentials."""
    return TestClient(app, headers=auth_headers)


@pytest.fixture
def create_category(auth_client: TestClient):
    """Create a category through the API and return its JSON."""

    def _create(name: str = "Electronics") -> dict[str, Any]:
        response = auth_client.post("/api/admin/categories", json={"name": name})
        assert response.status_code == 200
        return response.json()

    return _create


@pytest.fixture
def create_product(auth_client: TestClient):
    """Create a product through the API and return its JSON."""

    def _create(category_id: int, **fields: Any) -> dict[str, Any]:
        body = {"name": "Test", "price": 10.0, "quantity": 1, "category_id": category_id}
        body.update(fields)
        response = auth_client.post("/api/admin/products", json=body)
        assert response.status_code == 200, response.text
        return response.json()

    return _create
