"""Store wiring.

Opens the category, product and admin stores for the configured
backend: one SQLAlchemy session per unit of work, or the shared
in-memory catalog.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from shop.catalog.memory import InMemoryCatalog, get_memory_catalog
from shop.catalog.repository import (
    AdminAccountRepository,
    CategoryRepository,
    ProductRepository,
    SqlAdminAccountRepository,
    SqlCategoryRepository,
    SqlProductRepository,
)
from shop.infrastructure.config import settings
from shop.infrastructure.database import async_session_factory


@dataclass
class CatalogStores:
    """The stores used by one unit of work."""

    categories: CategoryRepository
    products: ProductRepository
    admins: AdminAccountRepository

    @classmethod
    def for_session(cls, session: AsyncSession) -> "CatalogStores":
        """Build SQLAlchemy-backed stores sharing one session."""
        return cls(
            categories=SqlCategoryRepository(session),
            products=SqlProductRepository(session),
            admins=SqlAdminAccountRepository(session),
        )

    @classmethod
    def in_memory(cls, catalog: InMemoryCatalog) -> "CatalogStores":
        """Wrap an in-memory catalog."""
        return cls(
            categories=catalog.categories,
            products=catalog.products,
            admins=catalog.admins,
        )


@asynccontextmanager
async def open_stores() -> AsyncIterator[CatalogStores]:
    """Open stores for the configured backend.

    With the database backend the session is committed when the block
    exits normally and rolled back if it raises.

    Yields:
        CatalogStores for one unit of work.
    """
    if settings.storage_backend == "memory":
        yield CatalogStores.in_memory(get_memory_catalog())
        return

    async with async_session_factory() as session:
        try:
            yield CatalogStores.for_session(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
