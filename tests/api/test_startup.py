"""Tests for application startup with the in-memory backend."""

import pytest
from fastapi.testclient import TestClient

from shop.catalog import memory
from shop.catalog.memory import get_memory_catalog, reset_memory_catalog
from shop.catalog.stores import open_stores
from shop.infrastructure.config import settings
from shop.main import app


@pytest.fixture(autouse=True)
def memory_backend(monkeypatch):
    """Run startup against a fresh shared in-memory catalog."""
    monkeypatch.setattr(settings, "storage_backend", "memory")
    reset_memory_catalog()
    yield
    memory._catalog = None


async def test_open_stores_uses_shared_catalog() -> None:
    async with open_stores() as stores:
        assert stores.categories is get_memory_catalog().categories


async def test_startup_seeds_once() -> None:
    """Startup seeds the empty store, and a restart adds nothing."""
    with TestClient(app):
        pass
    with TestClient(app):
        pass

    catalog = get_memory_catalog()
    assert await catalog.categories.count() == 5
    assert await catalog.products.count() == 12


async def test_startup_without_seeding(monkeypatch) -> None:
    monkeypatch.setattr(settings, "seed_on_startup", False)

    with TestClient(app):
        pass

    assert await get_memory_catalog().categories.count() == 0


async def test_startup_bootstraps_admin_account(monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_auth_backend", "account")

    with TestClient(app):
        pass

    account = await get_memory_catalog().admins.find_by_username(settings.admin_username)
    assert account is not None
    assert account.password == settings.admin_password
