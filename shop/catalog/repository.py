"""Catalog repositories.

Defines the store contracts for categories, products and admin accounts
and their SQLAlchemy-backed implementations. Every operation is atomic
on its own; none spans more than one entity write.
"""

from abc import ABC, abstractmethod

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shop.domain.entities import AdminAccount, Category, Product, ProductDraft
from shop.domain.exceptions import InvalidReferenceError, NotFoundError
from shop.infrastructure.models import AdminModel, CategoryModel, ProductModel


# ============================================================================
# Contracts
# ============================================================================


class CategoryRepository(ABC):
    """Store contract for categories."""

    @abstractmethod
    async def create(self, name: str) -> Category:
        """Insert a category and assign its id."""

    @abstractmethod
    async def get_all(self) -> list[Category]:
        """Get all categories ordered by id."""

    @abstractmethod
    async def get_by_id(self, category_id: int) -> Category:
        """Get a category.

        Raises:
            NotFoundError: If the id does not resolve.
        """

    @abstractmethod
    async def update(self, category_id: int, name: str) -> Category:
        """Replace a category's name.

        Raises:
            NotFoundError: If the id does not resolve.
        """

    @abstractmethod
    async def delete(self, category_id: int) -> None:
        """Delete a category without checking for referencing products.

        Raises:
            NotFoundError: If the id does not resolve.
        """

    @abstractmethod
    async def count(self) -> int:
        """Count stored categories."""


class ProductRepository(ABC):
    """Store contract for products.

    Every returned product carries its resolved category, or None when
    the category has been deleted since the product was written.
    """

    @abstractmethod
    async def create(self, draft: ProductDraft) -> Product:
        """Insert a product and assign its id.

        Raises:
            InvalidReferenceError: If the draft's category does not exist.
        """

    @abstractmethod
    async def get_all(self) -> list[Product]:
        """Get all products ordered by id."""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Product:
        """Get a product.

        Raises:
            NotFoundError: If the id does not resolve.
        """

    @abstractmethod
    async def update(self, product_id: int, draft: ProductDraft) -> Product:
        """Replace a product's fields.

        Raises:
            NotFoundError: If the product id does not resolve.
            InvalidReferenceError: If the draft's category does not exist.
        """

    @abstractmethod
    async def delete(self, product_id: int) -> None:
        """Delete a product.

        Raises:
            NotFoundError: If the id does not resolve.
        """

    @abstractmethod
    async def count(self) -> int:
        """Count stored products."""


class AdminAccountRepository(ABC):
    """Store contract for administrator accounts."""

    @abstractmethod
    async def find_by_username(self, username: str) -> AdminAccount | None:
        """Get an account by username, or None."""

    @abstractmethod
    async def save(self, account: AdminAccount) -> AdminAccount:
        """Insert or replace the account with the same username."""


# ============================================================================
# SQLAlchemy Implementations
# ============================================================================


def _to_category(row: CategoryModel) -> Category:
    return Category(id=row.id, name=row.name)


def _to_product(row: ProductModel, category: CategoryModel | None) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        price=row.price,
        quantity=row.quantity,
        category_id=row.category_id,
        category=_to_category(category) if category is not None else None,
        description=row.description,
        image_path=row.image_path,
    )


class SqlCategoryRepository(CategoryRepository):
    """Category store backed by the ``categories`` table.

    Example usage:
        async with async_session_factory() as session:
            repo = SqlCategoryRepository(session)
            category = await repo.create("Books")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def create(self, name: str) -> Category:
        row = CategoryModel(name=name)
        self.session.add(row)
        await self.session.flush()
        return _to_category(row)

    async def get_all(self) -> list[Category]:
        result = await self.session.execute(select(CategoryModel).order_by(CategoryModel.id))
        return [_to_category(row) for row in result.scalars().all()]

    async def get_by_id(self, category_id: int) -> Category:
        return _to_category(await self._get_row(category_id))

    async def update(self, category_id: int, name: str) -> Category:
        row = await self._get_row(category_id)
        row.name = name
        await self.session.flush()
        return _to_category(row)

    async def delete(self, category_id: int) -> None:
        row = await self._get_row(category_id)
        await self.session.delete(row)
        await self.session.flush()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(CategoryModel.id)))
        return result.scalar_one()

    async def _get_row(self, category_id: int) -> CategoryModel:
        row = await self.session.get(CategoryModel, category_id)
        if row is None:
            raise NotFoundError("Category", category_id)
        return row


class SqlProductRepository(ProductRepository):
    """Product store backed by the ``products`` table.

    Categories are resolved with an outer join, so a product whose
    category was deleted is still returned with ``category=None``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def create(self, draft: ProductDraft) -> Product:
        category = await self._resolve_category(draft.category_id)

        row = ProductModel()
        self._apply(row, draft)
        self.session.add(row)
        await self.session.flush()
        return _to_product(row, category)

    async def get_all(self) -> list[Product]:
        query = (
            select(ProductModel, CategoryModel)
            .outerjoin(CategoryModel, ProductModel.category_id == CategoryModel.id)
            .order_by(ProductModel.id)
        )
        result = await self.session.execute(query)
        return [_to_product(product, category) for product, category in result.all()]

    async def get_by_id(self, product_id: int) -> Product:
        query = (
            select(ProductModel, CategoryModel)
            .outerjoin(CategoryModel, ProductModel.category_id == CategoryModel.id)
            .where(ProductModel.id == product_id)
        )
        result = await self.session.execute(query)
        found = result.first()
        if found is None:
            raise NotFoundError("Product", product_id)
        product, category = found
        return _to_product(product, category)

    async def update(self, product_id: int, draft: ProductDraft) -> Product:
        row = await self._get_row(product_id)
        category = await self._resolve_category(draft.category_id)

        self._apply(row, draft)
        await self.session.flush()
        return _to_product(row, category)

    async def delete(self, product_id: int) -> None:
        row = await self._get_row(product_id)
        await self.session.delete(row)
        await self.session.flush()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(ProductModel.id)))
        return result.scalar_one()

    async def _get_row(self, product_id: int) -> ProductModel:
        row = await self.session.get(ProductModel, product_id)
        if row is None:
            raise NotFoundError("Product", product_id)
        return row

    async def _resolve_category(self, category_id: int) -> CategoryModel:
        category = await self.session.get(CategoryModel, category_id)
        if category is None:
            raise InvalidReferenceError(category_id)
        return category

    @staticmethod
    def _apply(row: ProductModel, draft: ProductDraft) -> None:
        row.name = draft.name
        row.description = draft.description
        row.price = draft.price
        row.quantity = draft.quantity
        row.category_id = draft.category_id
        row.image_path = draft.image_path


class SqlAdminAccountRepository(AdminAccountRepository):
    """Admin account store backed by the ``admins`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_username(self, username: str) -> AdminAccount | None:
        result = await self.session.execute(
            select(AdminModel).where(AdminModel.username == username)
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return AdminAccount(username=row.username, password=row.password)

    async def save(self, account: AdminAccount) -> AdminAccount:
        result = await self.session.execute(
            select(AdminModel).where(AdminModel.username == account.username)
        )
        row = result.scalar_one_or_none()
        if row is None:
            row = AdminModel(username=account.username, password=account.password)
            self.session.add(row)
        else:
            row.password = account.password
        await self.session.flush()
        return account
