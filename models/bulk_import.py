"""
Bulk product import schemas.

Request and response shapes for parsing pasted "Name<TAB>Price" text and
persisting the parsed products.
"""

from pydantic import Field, model_validator
from typing import Optional

from models.base import BaseSchema


class ParsedVariantSchema(BaseSchema):
    """One parsed size/price/SKU combination."""

    size: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    sku: str = ""


class ParsedProductSchema(BaseSchema):
    """A base product with its parsed variants."""

    name: str = Field(..., min_length=1)
    variants: list[ParsedVariantSchema] = Field(default_factory=list)


class SkippedLineSchema(BaseSchema):
    """A pasted line that could not be parsed."""

    line_number: int
    line: str
    reason: str = Field(..., description="missing_delimiter or invalid_price")


class BulkParseRequest(BaseSchema):
    """Raw pasted text to parse."""

    raw_text: str = Field(
        ...,
        description="One product per line: name and price separated by a tab or two spaces",
        examples=["Glass Cleaner 500ml\t39.90\nGlass Cleaner 1L\t64.90"]
    )


class BulkParseResponse(BaseSchema):
    """Parse preview returned before import."""

    products: list[ParsedProductSchema]
    skipped_lines: list[SkippedLineSchema] = Field(default_factory=list)
    line_count: int
    product_count: int
    variant_count: int
    summary: str


class BulkImportRequest(BaseSchema):
    """
    Import products into a category.

    Either raw_text (parsed server-side) or an already-parsed products list,
    typically the products from a previous preview, must be given.
    """

    category_id: str = Field(
        "",
        description="Category UUID the imported products are linked to"
    )
    raw_text: Optional[str] = None
    products: Optional[list[ParsedProductSchema]] = None

    @model_validator(mode='after')
    def validate_source(self):
        """Exactly one product source must be provided."""
        if self.raw_text is None and self.products is None:
            raise ValueError("Provide either raw_text or products")
        if self.raw_text is not None and self.products is not None:
            raise ValueError("Provide raw_text or products, not both")
        return self


class ImportFailureSchema(BaseSchema):
    """A product whose import failed at some stage."""

    product_name: str
    stage: str = Field(..., description="product, variants or category")
    error: str


class BulkImportResponse(BaseSchema):
    """Outcome of a bulk import."""

    products_created: int
    variants_created: int
    categories_linked: int
    failures: list[ImportFailureSchema] = Field(default_factory=list)
    skipped_lines: list[SkippedLineSchema] = Field(default_factory=list)
    message: str
