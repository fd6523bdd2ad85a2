"""
Product API routes.

Errors are returned in the standard envelope, see AppError.to_dict().
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    ProductStatus,
)
from services.product_service import get_product_service
from exceptions import (
    AppError,
    ProductNotFoundError,
)

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("", response_model=ProductListResponse)
async def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
    category_id: Optional[str] = Query(None, description="Filter by category"),
    status: Optional[ProductStatus] = Query(ProductStatus.ACTIVE, description="Filter by status"),
    featured: Optional[bool] = Query(None, description="Only featured (true) or non-featured (false)"),
    search: Optional[str] = Query(None, description="Search name, description and product code")
):
    """
    List products with optional filters.

    Search runs before pagination; total counts matching products.
    """
    try:
        service = get_product_service()

        products, total = service.get_all(
            page=page,
            page_size=page_size,
            category_id=category_id,
            status=status,
            featured=featured,
            search=search
        )

        total_pages = (total + page_size - 1) // page_size

        return ProductListResponse(
            data=products,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages
        )

    except Exception as e:
        return handle_error(e)


@router.get("/code/{product_code}", response_model=ProductResponse)
async def get_product_by_code(product_code: str):
    """
    Get a product by product code.

    Raises:
        404: Product not found
    """
    try:
        service = get_product_service()
        product = service.get_by_product_code(product_code)

        if not product:
            raise ProductNotFoundError(product_code)

        return product

    except Exception as e:
        return handle_error(e)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str):
    """
    Get a single product by ID.

    Raises:
        404: Product not found
    """
    try:
        service = get_product_service()
        return service.get_by_id(product_id)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(data: ProductCreate):
    """
    Create a new product.

    Raises:
        409: Product code already exists
        422: Validation error
    """
    try:
        service = get_product_service()
        return service.create(data)

    except Exception as e:
        return handle_error(e)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, data: ProductUpdate):
    """
    Update an existing product.

    Only provided fields are updated.

    Raises:
        404: Product not found
        409: New product code already exists
    """
    try:
        service = get_product_service()
        return service.update(product_id, data)

    except Exception as e:
        return handle_error(e)


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str):
    """
    Delete a product (soft delete).

    Sets status=inactive rather than removing from database.

    Raises:
        404: Product not found
    """
    try:
        service = get_product_service()
        service.delete(product_id)
        return None  # 204 No Content

    except Exception as e:
        return handle_error(e)


@router.get("/count/total")
async def count_products(
    status: Optional[ProductStatus] = Query(ProductStatus.ACTIVE, description="Filter by status")
):
    """Get product count."""
    try:
        service = get_product_service()
        return {"count": service.count(status=status)}

    except Exception as e:
        return handle_error(e)
