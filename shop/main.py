"""Shop admin API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and startup events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shop.api.admin import router as admin_router
from shop.api.catalog import router as catalog_router
from shop.api.health import router as health_router
from shop.api.middleware import setup_middleware
from shop.application.admin_service import ensure_admin_account
from shop.catalog.service import CatalogService
from shop.catalog.stores import open_stores
from shop.domain.exceptions import (
    DomainError,
    EmptyFileError,
    InvalidReferenceError,
    NotFoundError,
    StorageFailureError,
    UnauthorizedError,
    ValidationError,
)
from shop.infrastructure.config import settings
from shop.infrastructure.database import create_tables
from shop.infrastructure.logging import setup_logging

logger = structlog.get_logger()

DOMAIN_ERROR_STATUS: dict[type[DomainError], int] = {
    NotFoundError: 404,
    InvalidReferenceError: 400,
    ValidationError: 422,
    EmptyFileError: 400,
    StorageFailureError: 500,
    UnauthorizedError: 401,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Creates tables, seeds the reference catalog once, and bootstraps the
    admin account when the account backend is enabled.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    setup_logging()
    logger.info(
        "Starting shop admin API",
        version=settings.api_version,
        storage_backend=settings.storage_backend,
        admin_auth_backend=settings.admin_auth_backend,
    )

    if settings.storage_backend == "database":
        await create_tables()

    async with open_stores() as stores:
        if settings.seed_on_startup:
            await CatalogService(stores.categories, stores.products).seed_catalog()
        if settings.admin_auth_backend == "account":
            await ensure_admin_account(
                stores.admins, settings.admin_username, settings.admin_password
            )

    yield

    logger.info("Shutting down shop admin API")


app = FastAPI(
    title="Shop Admin API",
    description="Catalog back office: categories, products and product images",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(catalog_router)
app.include_router(admin_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def _error_body(
    request: Request,
    error_code: str,
    message: str,
    details: list[dict] | None = None,
) -> dict:
    return {
        "error_code": error_code,
        "message": message,
        "details": details or [],
        "request_id": getattr(request.state, "request_id", None),
    }


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain errors to HTTP responses."""
    status_code = next(
        (code for cls, code in DOMAIN_ERROR_STATUS.items() if isinstance(exc, cls)),
        400,
    )

    if status_code >= 500:
        logger.error(
            "Domain error",
            path=request.url.path,
            error_code=exc.error_code,
            error=exc.message,
            cause=repr(exc.__cause__) if exc.__cause__ else None,
        )

    if isinstance(exc, ValidationError):
        details = [{"field": exc.field, "message": exc.details["reason"]}]
    else:
        details = [
            {"field": key, "message": str(value)}
            for key, value in exc.details.items()
            if value is not None
        ]
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None

    return JSONResponse(
        status_code=status_code,
        content=_error_body(request, exc.error_code, exc.message, details),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation errors with one detail per problem."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_error_body(request, "VALIDATION_ERROR", "Request validation failed", details),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, error_code, message, details),
    )
