"""
Unit tests for BulkImportService.

Run: pytest tests/unit/test_bulk_import_service.py -v
"""

import pytest

from services.bulk_import_service import (
    BulkImportService,
    BulkImportResult,
    ImportFailure,
    STAGE_PRODUCT,
    STAGE_VARIANTS,
    STAGE_CATEGORY,
)
from parsers.bulk_product_parser import ParsedProduct, ParsedVariant
from exceptions import CategoryRequiredError, NoProductsToImportError


CATEGORY_ID = "cat-cleaners"


def _products() -> list[ParsedProduct]:
    return [
        ParsedProduct(name="Glass Cleaner", variants=[
            ParsedVariant(size="500ml", price=39.90, sku="GLASS-CLEANER-500ML"),
            ParsedVariant(size="1L", price=64.90, sku="GLASS-CLEANER-1L"),
        ]),
        ParsedProduct(name="Mystery Item", variants=[
            ParsedVariant(size="Standard", price=10.00, sku="MYSTERY-ITEM"),
        ]),
    ]


class TestBulkImportServicePreview:
    """Tests for BulkImportService.preview()"""

    def test_preview_writes_nothing(self, mock_supabase, sample_bulk_text):
        """Preview parses but never touches the database."""
        service = BulkImportService(mock_supabase)

        result = service.preview(sample_bulk_text)

        assert len(result.products) == 4
        assert not mock_supabase.inserted


class TestBulkImportServiceImportProducts:
    """Tests for BulkImportService.import_products()"""

    def test_imports_products_variants_and_links(self, mock_supabase):
        """Each product gets a row, its variants and a category link."""
        service = BulkImportService(mock_supabase)

        result = service.import_products(_products(), CATEGORY_ID)

        assert result.success
        assert result.products_created == 2
        assert result.variants_created == 3
        assert result.categories_linked == 2
        assert result.message == "Successfully imported 2 products."

        products = mock_supabase.inserted["products"]
        assert [p["name"] for p in products] == ["Glass Cleaner", "Mystery Item"]
        assert products[0]["description"] == "Glass Cleaner - Auto-imported product"
        assert products[0]["product_code"] == "GLASS-CLEANER"
        assert products[0]["status"] == "active"
        assert products[0]["featured"] is False
        assert products[0]["category_id"] == CATEGORY_ID

    def test_variants_reference_their_product(self, mock_supabase):
        """Variant rows carry the new product's id and start with zero stock."""
        service = BulkImportService(mock_supabase)

        result = service.import_products(_products(), CATEGORY_ID)

        variants = mock_supabase.inserted["product_variants"]
        glass_cleaner_id = result.product_ids[0]
        assert [v["product_id"] for v in variants[:2]] == [glass_cleaner_id, glass_cleaner_id]
        assert variants[0]["size"] == "500ml"
        assert variants[0]["price"] == 39.90
        assert variants[0]["sku"] == "GLASS-CLEANER-500ML"
        assert all(v["stock_quantity"] == 0 for v in variants)

    def test_category_links(self, mock_supabase):
        """Every created product is linked to the chosen category."""
        service = BulkImportService(mock_supabase)

        result = service.import_products(_products(), CATEGORY_ID)

        links = mock_supabase.inserted["product_categories"]
        assert [link["product_id"] for link in links] == result.product_ids
        assert {link["category_id"] for link in links} == {CATEGORY_ID}

    def test_product_insert_failure_skips_product(self, mock_supabase):
        """When the product row fails, its variants and link are not attempted."""
        mock_supabase.fail_on("products", "insert", "duplicate key value")
        service = BulkImportService(mock_supabase)

        result = service.import_products(_products(), CATEGORY_ID)

        assert result.products_created == 0
        assert result.variants_created == 0
        assert result.categories_linked == 0
        assert not mock_supabase.inserted["product_variants"]
        assert [f.stage for f in result.failures] == [STAGE_PRODUCT, STAGE_PRODUCT]
        assert result.failures[0] == ImportFailure("Glass Cleaner", STAGE_PRODUCT, "duplicate key value")

    def test_variant_failure_continues(self, mock_supabase):
        """A variants failure is recorded and the product is still linked."""
        mock_supabase.fail_on("product_variants", "insert")
        service = BulkImportService(mock_supabase)

        result = service.import_products(_products(), CATEGORY_ID)

        assert not result.success
        assert result.products_created == 2
        assert result.variants_created == 0
        assert result.categories_linked == 2
        assert [f.stage for f in result.failures] == [STAGE_VARIANTS, STAGE_VARIANTS]
        assert result.message == "Successfully imported 2 products. 2 steps failed."

    def test_category_link_failure_is_recorded(self, mock_supabase):
        """A link failure does not undo the product or its variants."""
        mock_supabase.fail_on("product_categories", "insert")
        service = BulkImportService(mock_supabase)

        result = service.import_products(_products(), CATEGORY_ID)

        assert result.products_created == 2
        assert result.variants_created == 3
        assert result.categories_linked == 0
        assert {f.stage for f in result.failures} == {STAGE_CATEGORY}

    def test_product_without_variants(self, mock_supabase):
        """No variant insert is sent for a product with no variants."""
        service = BulkImportService(mock_supabase)

        result = service.import_products([ParsedProduct(name="Gift Card")], CATEGORY_ID)

        assert result.products_created == 1
        assert result.variants_created == 0
        assert "product_variants" not in mock_supabase.inserted

    def test_progress_callback(self, mock_supabase):
        """on_progress is called once per product with (done, total)."""
        service = BulkImportService(mock_supabase)
        calls = []

        service.import_products(_products(), CATEGORY_ID, on_progress=lambda done, total: calls.append((done, total)))

        assert calls == [(1, 2), (2, 2)]

    @pytest.mark.parametrize("category_id", ["", "   "])
    def test_blank_category_raises(self, mock_supabase, category_id):
        """A category is required before anything is written."""
        service = BulkImportService(mock_supabase)

        with pytest.raises(CategoryRequiredError) as exc_info:
            service.import_products(_products(), category_id)

        assert exc_info.value.status_code == 422
        assert exc_info.value.code == "CATEGORY_REQUIRED"
        assert not mock_supabase.inserted

    def test_empty_products_raises(self, mock_supabase):
        """Importing nothing is an error."""
        service = BulkImportService(mock_supabase)

        with pytest.raises(NoProductsToImportError):
            service.import_products([], CATEGORY_ID)


class TestBulkImportServiceImportText:
    """Tests for BulkImportService.import_text()"""

    def test_parses_and_imports(self, mock_supabase, sample_bulk_text):
        """Raw text is parsed then imported."""
        service = BulkImportService(mock_supabase)

        result = service.import_text(sample_bulk_text, CATEGORY_ID)

        assert result.products_created == 4
        assert result.variants_created == 5
        assert result.skipped_lines == []

    def test_skipped_lines_are_carried(self, mock_supabase):
        """Lines dropped by the parser are reported with the import result."""
        service = BulkImportService(mock_supabase)

        result = service.import_text("Wax Paste 250ml\t50.00\nbroken line", CATEGORY_ID)

        assert result.products_created == 1
        assert len(result.skipped_lines) == 1
        assert result.to_dict()["skipped_lines"][0]["line_number"] == 2

    def test_nothing_parsed_raises(self, mock_supabase):
        """Text with no valid line is rejected."""
        service = BulkImportService(mock_supabase)

        with pytest.raises(NoProductsToImportError) as exc_info:
            service.import_text("NoDelimiterHere123\nSome Product\tABC", CATEGORY_ID)

        assert exc_info.value.code == "NO_PRODUCTS_TO_IMPORT"
        assert not mock_supabase.inserted

    def test_category_checked_before_parsing(self, mock_supabase):
        """A blank category fails even when the text is also empty."""
        service = BulkImportService(mock_supabase)

        with pytest.raises(CategoryRequiredError):
            service.import_text("", "")


class TestBulkImportResult:
    """Tests for BulkImportResult"""

    def test_to_dict(self):
        """to_dict() matches the API response shape."""
        result = BulkImportResult(products_created=1, variants_created=2, categories_linked=1)
        result.failures.append(ImportFailure("Wax Paste", STAGE_CATEGORY, "timeout"))

        data = result.to_dict()

        assert data["failures"] == [{"product_name": "Wax Paste", "stage": "category", "error": "timeout"}]
        assert data["message"] == "Successfully imported 1 products. 1 steps failed."
        assert data["skipped_lines"] == []
