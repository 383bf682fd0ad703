"""Catalog service for category and product operations.

High-level service that combines the category and product stores,
checks field invariants, and seeds the reference catalog.
"""

from dataclasses import dataclass
from typing import Any

import structlog

from shop.catalog import seed_data
from shop.catalog.repository import CategoryRepository, ProductRepository
from shop.domain.entities import Category, Product, ProductDraft, clean_name

logger = structlog.get_logger()


@dataclass
class SeedResult:
    """Counts inserted by a seeding run.

    Attributes:
        categories_created: Number of categories inserted.
        products_created: Number of products inserted.
    """

    categories_created: int = 0
    products_created: int = 0

    @property
    def skipped(self) -> bool:
        """True when nothing was inserted."""
        return self.categories_created == 0 and self.products_created == 0


class CatalogService:
    """Service for catalog operations.

    Store errors (NotFoundError, InvalidReferenceError) propagate
    unchanged to the caller.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(
                SqlCategoryRepository(session),
                SqlProductRepository(session),
            )
            await service.seed_catalog()
            products = await service.list_products()
    """

    def __init__(
        self,
        categories: CategoryRepository,
        products: ProductRepository,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            categories: Category store.
            products: Product store.
            request_id: Request ID for correlation.
        """
        self.categories = categories
        self.products = products
        self.request_id = request_id

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def list_categories(self) -> list[Category]:
        """Get all categories."""
        return await self.categories.get_all()

    async def get_category(self, category_id: int) -> Category:
        """Get a category by id."""
        return await self.categories.get_by_id(category_id)

    async def create_category(self, name: str) -> Category:
        """Create a category.

        Args:
            name: Category name.

        Returns:
            Created category with its assigned id.
        """
        category = await self.categories.create(clean_name(name))
        logger.info(
            "Category created",
            category_id=category.id,
            name=category.name,
            request_id=self.request_id,
        )
        return category

    async def update_category(self, category_id: int, name: str) -> Category:
        """Rename a category."""
        category = await self.categories.update(category_id, clean_name(name))
        logger.info(
            "Category updated",
            category_id=category_id,
            name=category.name,
            request_id=self.request_id,
        )
        return category

    async def delete_category(self, category_id: int) -> None:
        """Delete a category.

        Products that still reference it are left in place and read back
        with ``category=None``.
        """
        await self.categories.delete(category_id)
        logger.info("Category deleted", category_id=category_id, request_id=self.request_id)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def list_products(self) -> list[Product]:
        """Get all products with their categories resolved."""
        return await self.products.get_all()

    async def get_product(self, product_id: int) -> Product:
        """Get a product by id."""
        return await self.products.get_by_id(product_id)

    async def create_product(self, draft: ProductDraft) -> Product:
        """Create a product.

        Args:
            draft: Product fields.

        Returns:
            Created product.

        Raises:
            InvalidReferenceError: If the category does not exist.
        """
        product = await self.products.create(draft)
        logger.info(
            "Product created",
            product_id=product.id,
            category_id=product.category_id,
            request_id=self.request_id,
        )
        return product

    async def update_product(self, product_id: int, changes: dict[str, Any]) -> Product:
        """Update a product with the supplied fields.

        Fields absent from ``changes`` keep their current values. An ``id``
        in ``changes`` is ignored; ``product_id`` always wins.

        Args:
            product_id: Product to update.
            changes: Field values to apply.

        Returns:
            Updated product.

        Raises:
            NotFoundError: If the product does not exist.
            InvalidReferenceError: If the new category does not exist.
            ValidationError: If a merged field is invalid.
        """
        current = await self.products.get_by_id(product_id)
        draft = ProductDraft.from_product(current).merged(changes)
        product = await self.products.update(product_id, draft)
        logger.info(
            "Product updated",
            product_id=product_id,
            fields=sorted(k for k in changes if k != "id"),
            request_id=self.request_id,
        )
        return product

    async def attach_image(self, product_id: int, image_path: str) -> Product:
        """Associate a stored image with a product."""
        return await self.update_product(product_id, {"image_path": image_path})

    async def delete_product(self, product_id: int) -> None:
        """Delete a product."""
        await self.products.delete(product_id)
        logger.info("Product deleted", product_id=product_id, request_id=self.request_id)

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    async def seed_catalog(self) -> SeedResult:
        """Insert the reference catalog if no category exists yet.

        Runs at most once per store: any existing category, even with no
        products, skips seeding entirely.

        Returns:
            Counts of inserted categories and products.
        """
        existing = await self.categories.count()
        if existing > 0:
            logger.info("Catalog already seeded", categories=existing)
            return SeedResult()

        by_name: dict[str, Category] = {}
        for name in seed_data.CATEGORIES:
            by_name[name] = await self.categories.create(name)

        for item in seed_data.PRODUCTS:
            await self.products.create(
                ProductDraft(
                    name=item.name,
                    description=item.description,
                    price=item.price,
                    quantity=item.quantity,
                    category_id=by_name[item.category].id,
                )
            )

        result = SeedResult(
            categories_created=len(by_name),
            products_created=len(seed_data.PRODUCTS),
        )
        logger.info(
            "Catalog seeded",
            categories_created=result.categories_created,
            products_created=result.products_created,
        )
        return result
