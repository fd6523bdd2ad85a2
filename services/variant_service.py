"""
Product variant service.

Variants live in product_variants; each belongs to one product and sizes
are unique per product (case-insensitive).
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.variant import VariantCreate, VariantUpdate, VariantResponse
from exceptions import (
    ProductNotFoundError,
    VariantNotFoundError,
    VariantSizeExistsError,
    DatabaseError
)
from parsers.bulk_product_parser import derive_sku

logger = structlog.get_logger(__name__)


class VariantService:
    """Variant CRUD for one product at a time."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "product_variants"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_for_product(self, product_id: str) -> list[VariantResponse]:
        """Get all variants of a product, cheapest first."""
        logger.debug("getting_variants", product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("product_id", product_id)
                .order("price")
                .execute()
            )
            return [VariantResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("get_variants_failed", product_id=product_id, error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, variant_id: str) -> VariantResponse:
        """
        Get a single variant.

        Raises:
            VariantNotFoundError: If the variant doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", variant_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_variant_failed", variant_id=variant_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise VariantNotFoundError(variant_id)

        return VariantResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, product_id: str, data: VariantCreate) -> VariantResponse:
        """
        Add a variant to a product.

        The SKU is derived from "<product name> <size>" when not supplied.

        Raises:
            ProductNotFoundError: If the product doesn't exist
            VariantSizeExistsError: If the product already has this size
        """
        logger.info("creating_variant", product_id=product_id, size=data.size)

        product_name = self._get_product_name(product_id)
        self._check_size_available(product_id, data.size)

        insert_data = {
            "product_id": product_id,
            "size": data.size,
            "price": data.price,
            "sku": data.sku or derive_sku(f"{product_name} {data.size}"),
            "stock_quantity": data.stock_quantity,
        }

        try:
            result = self.db.table(self.table).insert(insert_data).execute()
            variant = VariantResponse(**result.data[0])
        except Exception as e:
            logger.error("create_variant_failed", product_id=product_id, error=str(e))
            raise DatabaseError("insert", str(e))

        logger.info("variant_created", variant_id=variant.id, sku=variant.sku)
        return variant

    def update(self, variant_id: str, data: VariantUpdate) -> VariantResponse:
        """
        Update a variant.

        Raises:
            VariantNotFoundError: If the variant doesn't exist
            VariantSizeExistsError: If renaming to a size already on the product
        """
        logger.info("updating_variant", variant_id=variant_id)

        existing = self.get_by_id(variant_id)

        if data.size and data.size.lower() != existing.size.lower():
            self._check_size_available(existing.product_id, data.size, exclude_id=variant_id)

        update_data = data.model_dump(exclude_none=True)
        if not update_data:
            return existing

        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", variant_id)
                .execute()
            )
            variant = VariantResponse(**result.data[0])
        except Exception as e:
            logger.error("update_variant_failed", variant_id=variant_id, error=str(e))
            raise DatabaseError("update", str(e))

        logger.info("variant_updated", variant_id=variant_id, fields=list(update_data.keys()))
        return variant

    def delete(self, variant_id: str) -> bool:
        """
        Delete a variant permanently.

        Raises:
            VariantNotFoundError: If the variant doesn't exist
        """
        logger.info("deleting_variant", variant_id=variant_id)

        self.get_by_id(variant_id)

        try:
            self.db.table(self.table).delete().eq("id", variant_id).execute()
        except Exception as e:
            logger.error("delete_variant_failed", variant_id=variant_id, error=str(e))
            raise DatabaseError("delete", str(e))

        logger.info("variant_deleted", variant_id=variant_id)
        return True

    # ===================
    # HELPERS
    # ===================

    def _get_product_name(self, product_id: str) -> str:
        try:
            result = (
                self.db.table("products")
                .select("id, name")
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_product_failed", product_id=product_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise ProductNotFoundError(product_id)
        return result.data[0]["name"]

    def _check_size_available(
        self,
        product_id: str,
        size: str,
        exclude_id: Optional[str] = None
    ) -> None:
        wanted = size.lower()
        for variant in self.get_for_product(product_id):
            if variant.id != exclude_id and variant.size.lower() == wanted:
                raise VariantSizeExistsError(product_id, size)


# Singleton instance for convenience
_variant_service: Optional[VariantService] = None

def get_variant_service() -> VariantService:
    """Get or create VariantService instance."""
    global _variant_service
    if _variant_service is None:
        _variant_service = VariantService()
    return _variant_service
