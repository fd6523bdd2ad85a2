"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and optional details,
and serializes to the standard error envelope via to_dict().
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class DuplicateError(ConflictError):
    """Duplicate resource (409)."""

    def __init__(
        self,
        resource: str,
        field: str,
        value: str
    ):
        super().__init__(
            code=f"{resource.upper()}_{field.upper()}_EXISTS",
            message=f"{resource} with this {field} already exists",
            details={field: value}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# PRODUCT ERRORS
# ===================

class ProductNotFoundError(NotFoundError):
    """Product not found."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Product",
            identifier=product_id,
            code="PRODUCT_NOT_FOUND"
        )


class ProductCodeExistsError(DuplicateError):
    """Product code already exists."""

    def __init__(self, product_code: str):
        super().__init__(
            resource="Product",
            field="product_code",
            value=product_code
        )


# ===================
# VARIANT ERRORS
# ===================

class VariantNotFoundError(NotFoundError):
    """Product variant not found."""

    def __init__(self, variant_id: str):
        super().__init__(
            resource="Variant",
            identifier=variant_id,
            code="VARIANT_NOT_FOUND"
        )


class VariantSizeExistsError(ConflictError):
    """A variant with this size already exists on the product."""

    def __init__(self, product_id: str, size: str):
        super().__init__(
            code="VARIANT_SIZE_EXISTS",
            message=f"Product already has a variant with size '{size}'",
            details={"product_id": product_id, "size": size}
        )


# ===================
# CATEGORY ERRORS
# ===================

class CategoryNotFoundError(NotFoundError):
    """Category not found."""

    def __init__(self, category_id: str):
        super().__init__(
            resource="Category",
            identifier=category_id,
            code="CATEGORY_NOT_FOUND"
        )


class CategorySlugExistsError(DuplicateError):
    """Category slug already exists."""

    def __init__(self, slug: str):
        super().__init__(
            resource="Category",
            field="slug",
            value=slug
        )


# ===================
# BULK IMPORT ERRORS
# ===================

class CategoryRequiredError(ValidationError):
    """Bulk import attempted without a target category."""

    def __init__(self):
        super().__init__(
            code="CATEGORY_REQUIRED",
            message="Please select a category for the products"
        )


class NoProductsToImportError(ValidationError):
    """Bulk import received nothing to persist."""

    def __init__(self, skipped_lines: int = 0):
        super().__init__(
            code="NO_PRODUCTS_TO_IMPORT",
            message="No products could be parsed from the submitted data",
            details={"skipped_lines": skipped_lines}
        )
