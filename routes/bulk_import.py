"""
Bulk product import routes.

Two-step flow: preview the parse of pasted text, then import either the
same text or the previewed products into a category.
"""

from fastapi import APIRouter
import structlog

from models.bulk_import import (
    BulkParseRequest,
    BulkParseResponse,
    BulkImportRequest,
    BulkImportResponse,
)
from parsers.bulk_product_parser import ParsedProduct, ParsedVariant
from services.bulk_import_service import get_bulk_import_service
from routes.products import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/preview", response_model=BulkParseResponse)
async def preview_import(data: BulkParseRequest):
    """
    Parse pasted product text without saving anything.

    Lines without a tab/double-space delimiter or with a non-numeric price
    are listed in skipped_lines.
    """
    try:
        result = get_bulk_import_service().preview(data.raw_text)
        return BulkParseResponse(**result.to_dict())

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=BulkImportResponse)
async def import_products(data: BulkImportRequest):
    """
    Import products into a category.

    Per-product failures do not abort the import; they are listed in
    failures.

    Raises:
        422: Category missing, or nothing to import
    """
    try:
        service = get_bulk_import_service()

        if data.raw_text is not None:
            result = service.import_text(data.raw_text, data.category_id)
        else:
            products = [
                ParsedProduct(
                    name=p.name,
                    variants=[
                        ParsedVariant(size=v.size, price=v.price, sku=v.sku)
                        for v in p.variants
                    ],
                )
                for p in data.products
            ]
            result = service.import_products(products, data.category_id)

        return BulkImportResponse(**result.to_dict())

    except Exception as e:
        return handle_error(e)
