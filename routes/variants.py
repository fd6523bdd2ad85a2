"""
Product variant API routes.

Paths are absolute: variants are listed and created under their product,
and updated or deleted by their own ID.
"""

from fastapi import APIRouter
import structlog

from models.variant import VariantCreate, VariantUpdate, VariantResponse
from services.variant_service import get_variant_service
from routes.products import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Variants"])


@router.get("/api/products/{product_id}/variants", response_model=list[VariantResponse])
async def list_variants(product_id: str):
    """List a product's variants, cheapest first."""
    try:
        return get_variant_service().get_for_product(product_id)

    except Exception as e:
        return handle_error(e)


@router.post("/api/products/{product_id}/variants", response_model=VariantResponse, status_code=201)
async def create_variant(product_id: str, data: VariantCreate):
    """
    Add a variant to a product.

    Raises:
        404: Product not found
        409: Size already exists on this product
    """
    try:
        return get_variant_service().create(product_id, data)

    except Exception as e:
        return handle_error(e)


@router.patch("/api/variants/{variant_id}", response_model=VariantResponse)
async def update_variant(variant_id: str, data: VariantUpdate):
    """
    Update a variant.

    Raises:
        404: Variant not found
        409: Size already exists on this product
    """
    try:
        return get_variant_service().update(variant_id, data)

    except Exception as e:
        return handle_error(e)


@router.delete("/api/variants/{variant_id}", status_code=204)
async def delete_variant(variant_id: str):
    """
    Delete a variant.

    Raises:
        404: Variant not found
    """
    try:
        get_variant_service().delete(variant_id)
        return None  # 204 No Content

    except Exception as e:
        return handle_error(e)
