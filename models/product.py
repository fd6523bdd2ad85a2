"""
Product schemas for validation and serialization.
"""

from pydantic import Field, field_validator
from typing import Optional
from enum import Enum

from models.base import BaseSchema, TimestampMixin


class ProductStatus(str, Enum):
    """Catalog visibility of a product."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class ProductCreate(BaseSchema):
    """
    Create a new product.

    Required: name
    Optional: everything else (product_code is derived from name if omitted)
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Product display name",
        examples=["Glass Cleaner", "Orange Foam Pad"]
    )
    description: Optional[str] = Field(
        None,
        description="Product description"
    )
    category_id: Optional[str] = Field(
        None,
        description="Primary category UUID"
    )
    product_code: Optional[str] = Field(
        None,
        min_length=1,
        max_length=100,
        description="Product code (unique identifier)"
    )
    status: ProductStatus = Field(
        ProductStatus.ACTIVE,
        description="Catalog visibility"
    )
    featured: bool = Field(
        False,
        description="Show on the storefront home page"
    )
    image_url: Optional[str] = Field(
        None,
        description="Main product image URL"
    )

    @field_validator("product_code")
    @classmethod
    def product_code_uppercase(cls, v: Optional[str]) -> Optional[str]:
        """Product code must be uppercase if provided."""
        if v is None:
            return v
        return v.upper().strip()


class ProductUpdate(BaseSchema):
    """
    Update existing product.

    All fields optional - only provided fields are updated.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category_id: Optional[str] = None
    product_code: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[ProductStatus] = None
    featured: Optional[bool] = None
    image_url: Optional[str] = None

    @field_validator("product_code")
    @classmethod
    def product_code_uppercase(cls, v: Optional[str]) -> Optional[str]:
        """Product code must be uppercase if provided."""
        if v is None:
            return v
        return v.upper().strip()


class ProductResponse(BaseSchema, TimestampMixin):
    """
    Product response with all fields.

    Used for GET responses.
    """

    id: str = Field(..., description="Product UUID")
    name: str = Field(..., description="Product display name")
    description: Optional[str] = Field(None, description="Product description")
    category_id: Optional[str] = Field(None, description="Primary category UUID")
    product_code: Optional[str] = Field(None, description="Product code")
    status: ProductStatus = Field(ProductStatus.ACTIVE, description="Catalog visibility")
    featured: bool = Field(False, description="Featured on home page")
    image_url: Optional[str] = Field(None, description="Main product image URL")

    @field_validator("featured", mode="before")
    @classmethod
    def featured_default(cls, v: Optional[bool]) -> bool:
        """Database allows NULL for featured."""
        return bool(v)

    @field_validator("status", mode="before")
    @classmethod
    def status_default(cls, v):
        """Database allows NULL for status; treat it as active."""
        return v or ProductStatus.ACTIVE


class ProductListResponse(BaseSchema):
    """List of products with pagination."""

    data: list[ProductResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
