"""Domain exceptions.

All catalog-level errors. Stores raise them, the catalog service lets
them propagate unchanged, and the API layer maps each one to an HTTP
response.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Lookup Errors
# ============================================================================


class NotFoundError(DomainError):
    """Raised when an id does not resolve to a stored entity."""

    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: int) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "Category", "Product").
            entity_id: The id that failed to resolve.
        """
        super().__init__(
            f"{entity_type} {entity_id} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class InvalidReferenceError(DomainError):
    """Raised when a product references a category that does not exist."""

    error_code = "INVALID_REFERENCE"

    def __init__(self, category_id: int) -> None:
        """Initialize invalid reference error.

        Args:
            category_id: The unresolved category id.
        """
        super().__init__(
            f"Category {category_id} does not exist",
            details={"category_id": category_id},
        )
        self.category_id = category_id


class ValidationError(DomainError):
    """Raised when a field value violates an entity invariant."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, field: str, reason: str) -> None:
        """Initialize validation error.

        Args:
            field: Name of the offending field.
            reason: Explanation of why the value is invalid.
        """
        super().__init__(
            f"Invalid {field}: {reason}",
            details={"field": field, "reason": reason},
        )
        self.field = field


# ============================================================================
# Image Errors
# ============================================================================


class EmptyFileError(DomainError):
    """Raised when an uploaded image has no content."""

    error_code = "EMPTY_FILE"

    def __init__(self, filename: str | None = None) -> None:
        super().__init__("Uploaded file is empty", details={"filename": filename})


class StorageFailureError(DomainError):
    """Raised when an image cannot be written to the uploads directory.

    The underlying ``OSError`` is chained as ``__cause__``.
    """

    error_code = "STORAGE_FAILURE"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to store file: {reason}", details={"reason": reason})


# ============================================================================
# Auth Errors
# ============================================================================


class UnauthorizedError(DomainError):
    """Raised when an admin credential does not match."""

    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Invalid admin credentials") -> None:
        super().__init__(message)
