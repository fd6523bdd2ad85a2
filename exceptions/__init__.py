"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    DuplicateError,
    DatabaseError,

    # Product-specific
    ProductNotFoundError,
    ProductCodeExistsError,

    # Variants
    VariantNotFoundError,
    VariantSizeExistsError,

    # Categories
    CategoryNotFoundError,
    CategorySlugExistsError,

    # Bulk import
    CategoryRequiredError,
    NoProductsToImportError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateError",
    "DatabaseError",

    # Product
    "ProductNotFoundError",
    "ProductCodeExistsError",

    # Variants
    "VariantNotFoundError",
    "VariantSizeExistsError",

    # Categories
    "CategoryNotFoundError",
    "CategorySlugExistsError",

    # Bulk import
    "CategoryRequiredError",
    "NoProductsToImportError",
]
