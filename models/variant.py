"""
Product variant schemas.

A variant is one size/price/SKU combination of a product.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin


class VariantCreate(BaseSchema):
    """
    Create a variant on an existing product.

    Required: size, price
    Optional: sku (derived from product name + size if omitted), stock_quantity
    """

    size: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Size token",
        examples=["500ml", "6Inch", "Standard"]
    )
    price: float = Field(..., ge=0, description="Unit price")
    sku: Optional[str] = Field(None, max_length=200, description="Stock keeping unit")
    stock_quantity: int = Field(0, ge=0, description="Units in stock")


class VariantUpdate(BaseSchema):
    """Partial variant update."""

    size: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    sku: Optional[str] = Field(None, max_length=200)
    stock_quantity: Optional[int] = Field(None, ge=0)


class VariantResponse(BaseSchema, TimestampMixin):
    """Variant as stored in product_variants."""

    id: str
    product_id: str
    size: str
    price: float
    sku: Optional[str] = None
    stock_quantity: Optional[int] = None
