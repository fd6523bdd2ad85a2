"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.products import router as products_router
from routes.variants import router as variants_router
from routes.categories import router as categories_router
from routes.bulk_import import router as bulk_import_router

__all__ = [
    "products_router",
    "variants_router",
    "categories_router",
    "bulk_import_router",
]
