"""API layer module.

Contains FastAPI routers, dependencies and request/response schemas.
"""

from shop.api.admin import router as admin_router
from shop.api.catalog import router as catalog_router
from shop.api.health import router as health_router

__all__ = [
    "admin_router",
    "catalog_router",
    "health_router",
]
