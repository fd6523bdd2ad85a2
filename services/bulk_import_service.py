"""
Bulk product import service.

Persists products parsed from pasted text. For each product, in order:

    1. insert the product row (products)
    2. insert its variants in one batch (product_variants)
    3. link it to the chosen category (product_categories)

Imports are best-effort: a failure is logged and recorded, and the loop
moves on to the next product. Nothing is rolled back, so a product can end
up without variants or without its category link.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional
import structlog

from supabase import Client

from config import settings, get_supabase_client, get_admin_client
from exceptions import CategoryRequiredError, NoProductsToImportError
from parsers.bulk_product_parser import (
    BulkParseResult,
    ParsedProduct,
    SkippedLine,
    parse_bulk_product_text,
)
from utils.text_utils import generate_product_code

logger = structlog.get_logger(__name__)

# Import stages, used in failure records
STAGE_PRODUCT = "product"
STAGE_VARIANTS = "variants"
STAGE_CATEGORY = "category"

ProgressCallback = Callable[[int, int], None]


@dataclass
class ImportFailure:
    """A product whose import failed at some stage."""
    product_name: str
    stage: str
    error: str


@dataclass
class BulkImportResult:
    """Counts and failures from one bulk import run."""
    products_created: int = 0
    variants_created: int = 0
    categories_linked: int = 0
    product_ids: list[str] = field(default_factory=list)
    failures: list[ImportFailure] = field(default_factory=list)
    skipped_lines: list[SkippedLine] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if every product went through all three stages."""
        return len(self.failures) == 0

    @property
    def message(self) -> str:
        """Summary shown to the admin when the import finishes."""
        text = f"Successfully imported {self.products_created} products."
        if self.failures:
            text += f" {len(self.failures)} steps failed."
        return text

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "products_created": self.products_created,
            "variants_created": self.variants_created,
            "categories_linked": self.categories_linked,
            "failures": [
                {"product_name": f.product_name, "stage": f.stage, "error": f.error}
                for f in self.failures
            ],
            "skipped_lines": [
                {"line_number": s.line_number, "line": s.line, "reason": s.reason}
                for s in self.skipped_lines
            ],
            "message": self.message,
        }


class BulkImportService:
    """
    Parses and persists bulk product text.

    Uses the admin client when one is configured, since imports write to
    tables guarded by row-level security.
    """

    def __init__(self, db: Optional[Client] = None):
        self.db = db or get_supabase_client()

    def preview(self, raw_text: str) -> BulkParseResult:
        """Parse raw text without writing anything."""
        result = parse_bulk_product_text(raw_text)
        logger.info(
            "bulk_import_preview",
            product_count=len(result.products),
            variant_count=result.variant_count,
            skipped_count=len(result.skipped_lines),
            first_products=[p.name for p in result.products[:settings.import_preview_limit]]
        )
        return result

    def import_text(
        self,
        raw_text: str,
        category_id: str,
        on_progress: Optional[ProgressCallback] = None
    ) -> BulkImportResult:
        """
        Parse raw text and import the products into a category.

        Raises:
            CategoryRequiredError: If category_id is blank
            NoProductsToImportError: If no line could be parsed
        """
        if not category_id or not category_id.strip():
            raise CategoryRequiredError()

        parsed = self.preview(raw_text)
        if not parsed.has_data:
            raise NoProductsToImportError(skipped_lines=len(parsed.skipped_lines))

        result = self.import_products(parsed.products, category_id, on_progress)
        result.skipped_lines = parsed.skipped_lines
        return result

    def import_products(
        self,
        products: list[ParsedProduct],
        category_id: str,
        on_progress: Optional[ProgressCallback] = None
    ) -> BulkImportResult:
        """
        Import parsed products into a category, one product at a time.

        Args:
            products: Parsed products (name + variants)
            category_id: Category UUID every product is linked to
            on_progress: Called with (done, total) after each product

        Returns:
            BulkImportResult with counts and per-product failures

        Raises:
            CategoryRequiredError: If category_id is blank
            NoProductsToImportError: If products is empty
        """
        if not category_id or not category_id.strip():
            raise CategoryRequiredError()
        if not products:
            raise NoProductsToImportError()

        logger.info("bulk_import_started", product_count=len(products), category_id=category_id)

        result = BulkImportResult()
        total = len(products)

        for done, product in enumerate(products, start=1):
            self._import_one(product, category_id, result)
            if on_progress:
                on_progress(done, total)

        logger.info(
            "bulk_import_complete",
            products_created=result.products_created,
            variants_created=result.variants_created,
            categories_linked=result.categories_linked,
            failure_count=len(result.failures)
        )

        return result

    # ===================
    # HELPERS
    # ===================

    def _import_one(self, product: ParsedProduct, category_id: str, result: BulkImportResult) -> None:
        try:
            response = self.db.table("products").insert({
                "name": product.name,
                "description": f"{product.name}{settings.import_description_suffix}",
                "category_id": category_id,
                "product_code": generate_product_code(product.name),
                "status": settings.import_default_status,
                "featured": False,
            }).execute()
            product_id = response.data[0]["id"]
        except Exception as e:
            logger.error("bulk_import_product_failed", name=product.name, error=str(e))
            result.failures.append(ImportFailure(product.name, STAGE_PRODUCT, str(e)))
            return

        result.products_created += 1
        result.product_ids.append(product_id)

        if product.variants:
            try:
                response = self.db.table("product_variants").insert([
                    {
                        "product_id": product_id,
                        "size": variant.size,
                        "price": variant.price,
                        "sku": variant.sku,
                        "stock_quantity": settings.import_default_stock,
                    }
                    for variant in product.variants
                ]).execute()
                result.variants_created += len(response.data)
            except Exception as e:
                logger.error(
                    "bulk_import_variants_failed",
                    name=product.name,
                    product_id=product_id,
                    error=str(e)
                )
                result.failures.append(ImportFailure(product.name, STAGE_VARIANTS, str(e)))

        try:
            self.db.table("product_categories").insert({
                "product_id": product_id,
                "category_id": category_id,
            }).execute()
            result.categories_linked += 1
        except Exception as e:
            logger.error(
                "bulk_import_category_link_failed",
                name=product.name,
                product_id=product_id,
                error=str(e)
            )
            result.failures.append(ImportFailure(product.name, STAGE_CATEGORY, str(e)))


# Singleton instance for convenience
_bulk_import_service: Optional[BulkImportService] = None

def get_bulk_import_service() -> BulkImportService:
    """Get or create BulkImportService instance."""
    global _bulk_import_service
    if _bulk_import_service is None:
        _bulk_import_service = BulkImportService(get_admin_client())
    return _bulk_import_service
