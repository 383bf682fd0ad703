"""Tests for health check endpoints."""

from fastapi.testclient import TestClient

from shop.api.deps import get_stores
from shop.main import app


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "shop-admin"
    assert "version" in data


def test_readiness_check(client: TestClient) -> None:
    """Test readiness endpoint returns ready status."""
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_readiness_check_store_down(client: TestClient) -> None:
    """Readiness reports 503 when the store fails."""

    class BrokenCategories:
        async def count(self) -> int:
            raise ConnectionError("database unavailable")

    class BrokenStores:
        categories = BrokenCategories()

    async def _broken():
        yield BrokenStores()

    app.dependency_overrides[get_stores] = _broken

    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"
