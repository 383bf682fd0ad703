"""Public catalog endpoints.

Read-only access to the storefront catalog:
- GET /api/categories - list categories
- GET /api/products - list products with their categories
- GET /api/products/{id} - product details
"""

from fastapi import APIRouter, status

from shop.api.deps import CatalogServiceDep
from shop.api.schemas import CategorySchema, ErrorResponse, ProductSchema

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get(
    "/categories",
    response_model=list[CategorySchema],
    summary="List categories",
)
async def list_categories(service: CatalogServiceDep) -> list[CategorySchema]:
    """List all categories."""
    categories = await service.list_categories()
    return [CategorySchema.from_entity(c) for c in categories]


@router.get(
    "/products",
    response_model=list[ProductSchema],
    summary="List products",
)
async def list_products(service: CatalogServiceDep) -> list[ProductSchema]:
    """List all products with their categories resolved."""
    products = await service.list_products()
    return [ProductSchema.from_entity(p) for p in products]


@router.get(
    "/products/{product_id}",
    response_model=ProductSchema,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(product_id: int, service: CatalogServiceDep) -> ProductSchema:
    """Get a single product.

    Args:
        product_id: Product identifier.

    Returns:
        The product with its category.
    """
    return ProductSchema.from_entity(await service.get_product(product_id))
