"""FastAPI dependencies.

Builds the catalog service, image store and admin gate per request,
and enforces the admin credential on mutating routes.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header, Request

from shop.application.admin_service import (
    AccountAdminGate,
    AdminCredential,
    AdminGate,
    SecretAdminGate,
)
from shop.catalog.service import CatalogService
from shop.catalog.stores import CatalogStores, open_stores
from shop.infrastructure.config import settings
from shop.infrastructure.storage import ImageStore


async def get_stores() -> AsyncGenerator[CatalogStores, None]:
    """Open the stores for the current request."""
    async with open_stores() as stores:
        yield stores


def get_catalog_service(
    request: Request,
    stores: Annotated[CatalogStores, Depends(get_stores)],
) -> CatalogService:
    """Get catalog service with request ID."""
    request_id = getattr(request.state, "request_id", None)
    return CatalogService(stores.categories, stores.products, request_id=request_id)


def get_image_store() -> ImageStore:
    """Get image store for the configured uploads directory."""
    return ImageStore(settings.upload_dir, url_prefix=settings.upload_url_prefix)


def get_admin_gate(stores: Annotated[CatalogStores, Depends(get_stores)]) -> AdminGate:
    """Get admin gate for the configured backend."""
    if settings.admin_auth_backend == "account":
        return AccountAdminGate(stores.admins)
    return SecretAdminGate(settings.admin_password)


def get_admin_credential(
    authorization: Annotated[str | None, Header()] = None,
    x_admin_username: Annotated[str | None, Header()] = None,
) -> AdminCredential | None:
    """Read the admin credential from request headers.

    Expects "Authorization: Bearer <password>" and, for the account
    backend, "X-Admin-Username: <username>".
    """
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return AdminCredential(password=parts[1], username=x_admin_username)


async def require_admin(
    credential: Annotated[AdminCredential | None, Depends(get_admin_credential)],
    gate: Annotated[AdminGate, Depends(get_admin_gate)],
) -> None:
    """Reject the request unless it carries an accepted admin credential.

    Raises:
        UnauthorizedError: If the credential is missing or rejected.
    """
    await gate.require(credential)


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
ImageStoreDep = Annotated[ImageStore, Depends(get_image_store)]
AdminGateDep = Annotated[AdminGate, Depends(get_admin_gate)]
