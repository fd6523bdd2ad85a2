"""
Text parsers module.
"""

from parsers.bulk_product_parser import (
    parse_product_data,
    parse_bulk_product_text,
    BulkParseResult,
    ParsedProduct,
    ParsedVariant,
    derive_sku,
)

__all__ = [
    "parse_product_data",
    "parse_bulk_product_text",
    "BulkParseResult",
    "ParsedProduct",
    "ParsedVariant",
    "derive_sku",
]
