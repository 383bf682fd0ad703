"""Admin API endpoints.

Provides the back office surface:
- POST /api/admin/login - check admin credentials
- CRUD over /api/admin/categories and /api/admin/products
- POST /api/admin/upload - store an image
- POST /api/admin/products/{id}/image - store an image and attach it

Reads are public. Every mutating route requires the admin credential
in the request headers (see ``require_admin``).
"""

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
import structlog

from shop.api.deps import AdminGateDep, CatalogServiceDep, ImageStoreDep, require_admin
from shop.api.schemas import (
    CategoryRequest,
    CategorySchema,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    ProductCreateRequest,
    ProductSchema,
    ProductUpdateRequest,
    UploadResponse,
)
from shop.application.admin_service import AdminCredential
from shop.domain.entities import ProductDraft
from shop.domain.exceptions import DomainError
from shop.infrastructure.storage import ImageStore, StoredImage

router = APIRouter(prefix="/api/admin", tags=["Admin"])
logger = structlog.get_logger()

ADMIN_ONLY = [Depends(require_admin)]
UNAUTHORIZED_RESPONSE = {status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}}
NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


async def _store_upload(store: ImageStore, file: UploadFile) -> StoredImage:
    data = await file.read()
    return await run_in_threadpool(store.store, file.filename, data)


# ============================================================================
# Login
# ============================================================================


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={status.HTTP_401_UNAUTHORIZED: {"model": LoginResponse}},
    summary="Admin login",
)
async def login(request: LoginRequest, gate: AdminGateDep) -> JSONResponse:
    """Check admin credentials.

    A successful check does not open a session; mutating requests must
    carry the credential themselves. A missing password is rejected like
    a wrong one.
    """
    credential = AdminCredential(password=request.password or "", username=request.username)
    if request.password is not None and await gate.authenticate(credential):
        logger.info("Admin login succeeded", username=request.username)
        body = LoginResponse(success=True, message="Login successful")
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump())

    logger.warning("Admin login failed", username=request.username)
    body = LoginResponse(success=False, message="Invalid password")
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=body.model_dump())


# ============================================================================
# Categories
# ============================================================================


@router.get("/categories", response_model=list[CategorySchema], summary="List categories")
async def list_categories(service: CatalogServiceDep) -> list[CategorySchema]:
    """List all categories."""
    return [CategorySchema.from_entity(c) for c in await service.list_categories()]


@router.post(
    "/categories",
    response_model=CategorySchema,
    dependencies=ADMIN_ONLY,
    responses=UNAUTHORIZED_RESPONSE,
    summary="Create category",
)
async def create_category(request: CategoryRequest, service: CatalogServiceDep) -> CategorySchema:
    """Create a category."""
    return CategorySchema.from_entity(await service.create_category(request.name))


@router.put(
    "/categories/{category_id}",
    response_model=CategorySchema,
    dependencies=ADMIN_ONLY,
    responses={**UNAUTHORIZED_RESPONSE, **NOT_FOUND_RESPONSE},
    summary="Rename category",
)
async def update_category(
    category_id: int,
    request: CategoryRequest,
    service: CatalogServiceDep,
) -> CategorySchema:
    """Rename a category. The path id wins over any id in the body."""
    return CategorySchema.from_entity(await service.update_category(category_id, request.name))


@router.delete(
    "/categories/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=ADMIN_ONLY,
    responses={**UNAUTHORIZED_RESPONSE, **NOT_FOUND_RESPONSE},
    summary="Delete category",
)
async def delete_category(category_id: int, service: CatalogServiceDep) -> Response:
    """Delete a category, even if products still reference it."""
    await service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Products
# ============================================================================


@router.get("/products", response_model=list[ProductSchema], summary="List products")
async def list_products(service: CatalogServiceDep) -> list[ProductSchema]:
    """List all products."""
    return [ProductSchema.from_entity(p) for p in await service.list_products()]


@router.get(
    "/products/{product_id}",
    response_model=ProductSchema,
    responses=NOT_FOUND_RESPONSE,
    summary="Get product",
)
async def get_product(product_id: int, service: CatalogServiceDep) -> ProductSchema:
    """Get a single product."""
    return ProductSchema.from_entity(await service.get_product(product_id))


@router.post(
    "/products",
    response_model=ProductSchema,
    dependencies=ADMIN_ONLY,
    responses={
        **UNAUTHORIZED_RESPONSE,
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    },
    summary="Create product",
)
async def create_product(
    request: ProductCreateRequest,
    service: CatalogServiceDep,
) -> ProductSchema:
    """Create a product in an existing category."""
    draft = ProductDraft(
        name=request.name,
        description=request.description,
        price=request.price,
        quantity=request.quantity,
        category_id=request.category_id,
        image_path=request.image_path,
    )
    return ProductSchema.from_entity(await service.create_product(draft))


@router.put(
    "/products/{product_id}",
    response_model=ProductSchema,
    dependencies=ADMIN_ONLY,
    responses={
        **UNAUTHORIZED_RESPONSE,
        **NOT_FOUND_RESPONSE,
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    },
    summary="Update product",
)
async def update_product(
    product_id: int,
    request: ProductUpdateRequest,
    service: CatalogServiceDep,
) -> ProductSchema:
    """Update the fields present in the body. The path id wins."""
    return ProductSchema.from_entity(await service.update_product(product_id, request.changes()))


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=ADMIN_ONLY,
    responses={**UNAUTHORIZED_RESPONSE, **NOT_FOUND_RESPONSE},
    summary="Delete product",
)
async def delete_product(product_id: int, service: CatalogServiceDep) -> Response:
    """Delete a product."""
    await service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/products/{product_id}/image",
    response_model=ProductSchema,
    dependencies=ADMIN_ONLY,
    responses={
        **UNAUTHORIZED_RESPONSE,
        **NOT_FOUND_RESPONSE,
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    },
    summary="Upload product image",
)
async def upload_product_image(
    product_id: int,
    service: CatalogServiceDep,
    store: ImageStoreDep,
    file: UploadFile = File(..., description="Image file"),
) -> ProductSchema:
    """Store an image and associate it with a product.

    Nothing is left in the uploads directory when the product cannot be
    updated.
    """
    # Fail before writing anything if the product is unknown
    await service.get_product(product_id)
    stored = await _store_upload(store, file)
    try:
        product = await service.attach_image(product_id, stored.url)
    except DomainError:
        await run_in_threadpool(store.discard, stored.filename)
        raise
    return ProductSchema.from_entity(product)


# ============================================================================
# Uploads
# ============================================================================


@router.post(
    "/upload",
    response_model=UploadResponse,
    dependencies=ADMIN_ONLY,
    responses={
        **UNAUTHORIZED_RESPONSE,
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    summary="Upload image",
)
async def upload_image(
    store: ImageStoreDep,
    file: UploadFile = File(..., description="Image file"),
) -> UploadResponse:
    """Store an image under a generated name.

    The returned ``url`` is later saved on a product as ``image_path``.
    """
    stored = await _store_upload(store, file)
    return UploadResponse(url=stored.url, filename=stored.filename)
