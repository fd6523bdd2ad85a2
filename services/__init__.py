"""
Business logic services.

Each service handles one domain area.
"""

from services.product_service import ProductService, get_product_service, filter_products
from services.variant_service import VariantService, get_variant_service
from services.category_service import CategoryService, get_category_service
from services.bulk_import_service import (
    BulkImportService,
    BulkImportResult,
    ImportFailure,
    get_bulk_import_service,
)

__all__ = [
    "ProductService",
    "get_product_service",
    "filter_products",
    "VariantService",
    "get_variant_service",
    "CategoryService",
    "get_category_service",
    "BulkImportService",
    "BulkImportResult",
    "ImportFailure",
    "get_bulk_import_service",
]
