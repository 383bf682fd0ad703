"""Product Catalog Service.

Provides category and product stores, the catalog service that
orchestrates them, and the reference seed data.
"""

from shop.catalog.memory import (
    InMemoryAdminAccountRepository,
    InMemoryCatalog,
    InMemoryCategoryRepository,
    InMemoryProductRepository,
)
from shop.catalog.repository import (
    AdminAccountRepository,
    CategoryRepository,
    ProductRepository,
    SqlAdminAccountRepository,
    SqlCategoryRepository,
    SqlProductRepository,
)
from shop.catalog.service import CatalogService, SeedResult

__all__ = [
    # Contracts
    "AdminAccountRepository",
    "CategoryRepository",
    "ProductRepository",
    # SQLAlchemy
    "SqlAdminAccountRepository",
    "SqlCategoryRepository",
    "SqlProductRepository",
    # In-memory
    "InMemoryAdminAccountRepository",
    "InMemoryCatalog",
    "InMemoryCategoryRepository",
    "InMemoryProductRepository",
    # Service
    "CatalogService",
    "SeedResult",
]
