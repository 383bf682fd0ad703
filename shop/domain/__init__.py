"""Domain layer.

Catalog entities and the exceptions raised when their rules are broken.
"""

from shop.domain.entities import AdminAccount, Category, Product, ProductDraft, clean_name
from shop.domain.exceptions import (
    DomainError,
    EmptyFileError,
    InvalidReferenceError,
    NotFoundError,
    StorageFailureError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    # Entities
    "AdminAccount",
    "Category",
    "Product",
    "ProductDraft",
    "clean_name",
    # Exceptions
    "DomainError",
    "EmptyFileError",
    "InvalidReferenceError",
    "NotFoundError",
    "StorageFailureError",
    "UnauthorizedError",
    "ValidationError",
]
