"""In-memory catalog repositories.

Dict-backed stores keyed by id, used for tests and for running the
service without a database (``STORAGE_BACKEND=memory``).
"""

from itertools import count

from shop.catalog.repository import (
    AdminAccountRepository,
    CategoryRepository,
    ProductRepository,
)
from shop.domain.entities import AdminAccount, Category, Product, ProductDraft
from shop.domain.exceptions import InvalidReferenceError, NotFoundError


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory repository for categories."""

    def __init__(self) -> None:
        self._categories: dict[int, Category] = {}
        self._ids = count(1)

    async def create(self, name: str) -> Category:
        category = Category(id=next(self._ids), name=name)
        self._categories[category.id] = category
        return category

    async def get_all(self) -> list[Category]:
        return [self._categories[key] for key in sorted(self._categories)]

    async def get_by_id(self, category_id: int) -> Category:
        category = self.find(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    async def update(self, category_id: int, name: str) -> Category:
        await self.get_by_id(category_id)
        category = Category(id=category_id, name=name)
        self._categories[category_id] = category
        return category

    async def delete(self, category_id: int) -> None:
        await self.get_by_id(category_id)
        del self._categories[category_id]

    async def count(self) -> int:
        return len(self._categories)

    def find(self, category_id: int) -> Category | None:
        """Get a category by id without raising."""
        return self._categories.get(category_id)


class InMemoryProductRepository(ProductRepository):
    """In-memory repository for products.

    Stores drafts by id and resolves the category from the shared
    category repository on every read.
    """

    def __init__(self, categories: InMemoryCategoryRepository) -> None:
        """Initialize repository.

        Args:
            categories: Category store used to resolve references.
        """
        self._categories = categories
        self._drafts: dict[int, ProductDraft] = {}
        self._ids = count(1)

    async def create(self, draft: ProductDraft) -> Product:
        self._check_reference(draft.category_id)
        product_id = next(self._ids)
        self._drafts[product_id] = draft
        return self._resolve(product_id, draft)

    async def get_all(self) -> list[Product]:
        return [self._resolve(key, self._drafts[key]) for key in sorted(self._drafts)]

    async def get_by_id(self, product_id: int) -> Product:
        draft = self._drafts.get(product_id)
        if draft is None:
            raise NotFoundError("Product", product_id)
        return self._resolve(product_id, draft)

    async def update(self, product_id: int, draft: ProductDraft) -> Product:
        if product_id not in self._drafts:
            raise NotFoundError("Product", product_id)
        self._check_reference(draft.category_id)
        self._drafts[product_id] = draft
        return self._resolve(product_id, draft)

    async def delete(self, product_id: int) -> None:
        if product_id not in self._drafts:
            raise NotFoundError("Product", product_id)
        del self._drafts[product_id]

    async def count(self) -> int:
        return len(self._drafts)

    def _check_reference(self, category_id: int) -> None:
        if self._categories.find(category_id) is None:
            raise InvalidReferenceError(category_id)

    def _resolve(self, product_id: int, draft: ProductDraft) -> Product:
        return Product.from_draft(product_id, draft, self._categories.find(draft.category_id))


class InMemoryAdminAccountRepository(AdminAccountRepository):
    """In-memory repository for admin accounts."""

    def __init__(self) -> None:
        self._accounts: dict[str, AdminAccount] = {}

    async def find_by_username(self, username: str) -> AdminAccount | None:
        return self._accounts.get(username)

    async def save(self, account: AdminAccount) -> AdminAccount:
        self._accounts[account.username] = account
        return account


class InMemoryCatalog:
    """Holds one set of in-memory stores shared across requests."""

    def __init__(self) -> None:
        self.categories = InMemoryCategoryRepository()
        self.products = InMemoryProductRepository(self.categories)
        self.admins = InMemoryAdminAccountRepository()


# Global catalog instance
_catalog: InMemoryCatalog | None = None


def get_memory_catalog() -> InMemoryCatalog:
    """Get in-memory catalog singleton."""
    global _catalog
    if _catalog is None:
        _catalog = InMemoryCatalog()
    return _catalog


def reset_memory_catalog() -> None:
    """Reset in-memory catalog (for testing)."""
    global _catalog
    _catalog = InMemoryCatalog()
