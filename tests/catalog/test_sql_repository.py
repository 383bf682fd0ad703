"""Tests for the SQLAlchemy repositories against SQLite."""

from collections.abc import AsyncGenerator
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import shop.infrastructure.models  # noqa: F401
from shop.catalog.repository import (
    SqlAdminAccountRepository,
    SqlCategoryRepository,
    SqlProductRepository,
)
from shop.catalog.service import CatalogService
from shop.domain.entities import AdminAccount
from shop.domain.exceptions import InvalidReferenceError, NotFoundError
from shop.infrastructure.database import Base


@pytest.fixture
async def session(tmp_path: Path) -> AsyncGenerator[AsyncSession, None]:
    """Create a session on a fresh SQLite database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def categories(session: AsyncSession) -> SqlCategoryRepository:
    return SqlCategoryRepository(session)


@pytest.fixture
def products(session: AsyncSession) -> SqlProductRepository:
    return SqlProductRepository(session)


class TestSqlCategoryRepository:
    """Tests for SqlCategoryRepository."""

    async def test_crud(self, categories: SqlCategoryRepository) -> None:
        """Create, read, rename, count and delete a category."""
        created = await categories.create("Books")
        assert created.id is not None
        assert await categories.count() == 1

        assert (await categories.get_by_id(created.id)).name == "Books"

        renamed = await categories.update(created.id, "Novels")
        assert renamed.id == created.id
        assert [c.name for c in await categories.get_all()] == ["Novels"]

        await categories.delete(created.id)
        assert await categories.count() == 0

    async def test_ids_are_unique(self, categories: SqlCategoryRepository) -> None:
        """Every created category gets a new id."""
        ids = [(await categories.create("Same")).id for _ in range(3)]
        assert len(set(ids)) == 3

    async def test_missing(self, categories: SqlCategoryRepository) -> None:
        """Unknown ids raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await categories.get_by_id(1)
        with pytest.raises(NotFoundError):
            await categories.update(1, "Name")
        with pytest.raises(NotFoundError):
            await categories.delete(1)


class TestSqlProductRepository:
    """Tests for SqlProductRepository."""

    async def test_create_and_get(
        self,
        categories: SqlCategoryRepository,
        products: SqlProductRepository,
        make_draft,
    ) -> None:
        """Products read back with their category resolved."""
        category = await categories.create("Electronics")
        created = await products.create(
            make_draft(category.id, price=Decimal("29999.00"), description="Phone")
        )

        fetched = await products.get_by_id(created.id)
        assert fetched.name == "Test"
        assert fetched.price == Decimal("29999.00")
        assert fetched.description == "Phone"
        assert fetched.category is not None
        assert fetched.category.id == category.id

    async def test_create_with_unknown_category(
        self, products: SqlProductRepository, make_draft
    ) -> None:
        """Unresolved categories fail and nothing is persisted."""
        with pytest.raises(InvalidReferenceError):
            await products.create(make_draft(5))
        assert await products.count() == 0

    async def test_update(
        self,
        categories: SqlCategoryRepository,
        products: SqlProductRepository,
        make_draft,
    ) -> None:
        """Update replaces fields and re-validates the category."""
        books = await categories.create("Books")
        sports = await categories.create("Sports")
        product = await products.create(make_draft(books.id))

        updated = await products.update(product.id, make_draft(sports.id, name="Test2"))
        assert updated.id == product.id
        assert updated.name == "Test2"
        assert updated.category is not None
        assert updated.category.name == "Sports"

        with pytest.raises(InvalidReferenceError):
            await products.update(product.id, make_draft(999))
        with pytest.raises(NotFoundError):
            await products.update(999, make_draft(books.id))

    async def test_delete(
        self,
        categories: SqlCategoryRepository,
        products: SqlProductRepository,
        make_draft,
    ) -> None:
        """Deleted products no longer resolve."""
        category = await categories.create("Books")
        product = await products.create(make_draft(category.id))

        await products.delete(product.id)
        with pytest.raises(NotFoundError):
            await products.get_by_id(product.id)
        with pytest.raises(NotFoundError):
            await products.delete(product.id)

    async def test_dangling_category(
        self,
        categories: SqlCategoryRepository,
        products: SqlProductRepository,
        make_draft,
    ) -> None:
        """Deleting a referenced category leaves products readable."""
        category = await categories.create("Books")
        product = await products.create(make_draft(category.id))

        await categories.delete(category.id)

        fetched = await products.get_by_id(product.id)
        assert fetched.category is None
        assert fetched.category_id == category.id
        assert [p.category for p in await products.get_all()] == [None]


async def test_seed_against_database(
    categories: SqlCategoryRepository, products: SqlProductRepository
) -> None:
    """Seeding writes the reference catalog once."""
    service = CatalogService(categories, products)

    first = await service.seed_catalog()
    second = await service.seed_catalog()

    assert (first.categories_created, first.products_created) == (5, 12)
    assert second.skipped
    assert await categories.count() == 5
    assert await products.count() == 12


async def test_admin_accounts(session: AsyncSession) -> None:
    """Accounts are found by username and replaced on save."""
    accounts = SqlAdminAccountRepository(session)
    assert await accounts.find_by_username("admin") is None

    await accounts.save(AdminAccount(username="admin", password="one"))
    await accounts.save(AdminAccount(username="admin", password="two"))

    account = await accounts.find_by_username("admin")
    assert account is not None
    assert account.password == "two"
