"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
)
from models.product import (
    ProductStatus,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
)
from models.variant import (
    VariantCreate,
    VariantUpdate,
    VariantResponse,
)
from models.category import (
    MoveDirection,
    CategoryCreate,
    CategoryResponse,
    CategoryMoveRequest,
)
from models.bulk_import import (
    ParsedVariantSchema,
    ParsedProductSchema,
    SkippedLineSchema,
    BulkParseRequest,
    BulkParseResponse,
    BulkImportRequest,
    ImportFailureSchema,
    BulkImportResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",
    # Product
    "ProductStatus",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",
    # Variant
    "VariantCreate",
    "VariantUpdate",
    "VariantResponse",
    # Category
    "MoveDirection",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryMoveRequest",
    # Bulk import
    "ParsedVariantSchema",
    "ParsedProductSchema",
    "SkippedLineSchema",
    "BulkParseRequest",
    "BulkParseResponse",
    "BulkImportRequest",
    "ImportFailureSchema",
    "BulkImportResponse",
]
