"""API schemas for the shop back office.

Pydantic models for request/response validation and serialization.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, model_validator

from shop.domain.entities import Category, Product


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Auth Schemas
# ============================================================================


class LoginRequest(BaseModel):
    """Admin login request."""

    password: str | None = Field(
        default=None, description="Admin password or configured secret"
    )
    username: str | None = Field(
        default=None, description="Account username (account backend only)"
    )


class LoginResponse(BaseModel):
    """Admin login result."""

    success: bool
    message: str


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryRequest(BaseModel):
    """Request to create or rename a category.

    An ``id`` in the body is accepted but ignored; the path id wins.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Category name")
    id: int | None = Field(default=None, description="Ignored")


class CategorySchema(BaseModel):
    """Category representation."""

    id: int
    name: str

    @classmethod
    def from_entity(cls, category: Category) -> "CategorySchema":
        return cls(id=category.id, name=category.name)


# ============================================================================
# Product Schemas
# ============================================================================


def _lift_category_reference(data: Any) -> Any:
    """Accept ``category`` as an id or as ``{"id": ...}`` in place of ``category_id``."""
    if not isinstance(data, dict) or "category_id" in data or "category" not in data:
        return data
    data = dict(data)
    category = data.pop("category")
    if isinstance(category, dict):
        data["category_id"] = category.get("id")
    else:
        data["category_id"] = category
    return data


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: str | None = Field(default=None, max_length=1000)
    price: Decimal = Field(..., ge=0, description="Unit price")
    quantity: int = Field(..., ge=0, description="Units in stock")
    category_id: int = Field(..., description="Owning category id")
    image_path: str | None = Field(default=None, description="Public image path")

    @model_validator(mode="before")
    @classmethod
    def lift_category(cls, data: Any) -> Any:
        return _lift_category_reference(data)


class ProductUpdateRequest(BaseModel):
    """Request to update a product.

    Only the fields present in the body are changed. An ``id`` in the
    body is accepted but ignored; the path id wins.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    price: Decimal | None = Field(default=None, ge=0)
    quantity: int | None = Field(default=None, ge=0)
    category_id: int | None = None
    image_path: str | None = None
    id: int | None = Field(default=None, description="Ignored")

    @model_validator(mode="before")
    @classmethod
    def lift_category(cls, data: Any) -> Any:
        return _lift_category_reference(data)

    def changes(self) -> dict[str, Any]:
        """Get the fields explicitly set by the client, minus ``id``."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class ProductSchema(BaseModel):
    """Product representation with its resolved category."""

    id: int
    name: str
    description: str | None
    price: float
    quantity: int
    category_id: int
    category: CategorySchema | None = Field(
        ..., description="Resolved category, null if it has been deleted"
    )
    image_path: str | None

    @classmethod
    def from_entity(cls, product: Product) -> "ProductSchema":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            quantity=product.quantity,
            category_id=product.category_id,
            category=(
                CategorySchema.from_entity(product.category)
                if product.category is not None
                else None
            ),
            image_path=product.image_path,
        )


# ============================================================================
# Upload Schemas
# ============================================================================


class UploadResponse(BaseModel):
    """Result of an image upload."""

    url: str = Field(..., description="Public path of the stored image")
    filename: str = Field(..., description="Generated filename")
