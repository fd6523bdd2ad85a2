"""
Product service for catalog CRUD operations.

Logs every operation with structlog and wraps Supabase failures in
DatabaseError; domain errors propagate unchanged.
"""

from typing import Iterable, Optional
import structlog

from config import get_supabase_client
from models.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductStatus,
)
from exceptions import (
    ProductNotFoundError,
    ProductCodeExistsError,
    DatabaseError
)
from utils.text_utils import generate_product_code, normalize_search_text

logger = structlog.get_logger(__name__)


class ProductService:
    """
    Product business logic.

    Handles CRUD operations for products.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "products"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        page: int = 1,
        page_size: int = 20,
        category_id: Optional[str] = None,
        status: Optional[ProductStatus] = ProductStatus.ACTIVE,
        featured: Optional[bool] = None,
        search: Optional[str] = None
    ) -> tuple[list[ProductResponse], int]:
        """
        Get all products with optional filters.

        With a search term, every row matching the other filters is loaded
        and searched before paginating, so total counts matches only.

        Args:
            page: Page number (1-indexed)
            page_size: Items per page
            category_id: Filter by primary category
            status: Filter by status (None for all)
            featured: Filter by featured flag
            search: Name/description/product code search

        Returns:
            Tuple of (products list, total count)
        """
        logger.info(
            "getting_products",
            page=page,
            page_size=page_size,
            category_id=category_id,
            status=status,
            search=search
        )

        try:
            query = self.db.table(self.table).select("*", count="exact")

            if status:
                query = query.eq("status", status.value)
            if category_id:
                query = query.eq("category_id", category_id)
            if featured is not None:
                query = query.eq("featured", featured)

            offset = (page - 1) * page_size
            query = query.order("name")

            if search:
                result = query.execute()
                matches = filter_products(
                    (ProductResponse(**row) for row in result.data),
                    search=search
                )
                products = matches[offset:offset + page_size]
                total = len(matches)
            else:
                result = query.range(offset, offset + page_size - 1).execute()
                products = [ProductResponse(**row) for row in result.data]
                total = result.count or 0

            logger.info(
                "products_retrieved",
                count=len(products),
                total=total
            )

            return products, total

        except Exception as e:
            logger.error(
                "get_products_failed",
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    def get_by_id(self, product_id: str) -> ProductResponse:
        """
        Get a single product by ID.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.debug("getting_product", product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", product_id)
                .single()
                .execute()
            )

            if not result.data:
                raise ProductNotFoundError(product_id)

            return ProductResponse(**result.data)

        except ProductNotFoundError:
            raise
        except Exception as e:
            logger.error(
                "get_product_failed",
                product_id=product_id,
                error=str(e)
            )
            # PostgREST reports a missing single() row as an error
            if "0 rows" in str(e) or "no rows" in str(e).lower():
                raise ProductNotFoundError(product_id)
            raise DatabaseError("select", str(e))

    def get_by_product_code(self, product_code: str) -> Optional[ProductResponse]:
        """
        Get a product by product code.

        Returns:
            ProductResponse or None if not found
        """
        logger.debug("getting_product_by_code", product_code=product_code)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("product_code", product_code.upper())
                .execute()
            )

            if not result.data:
                return None

            return ProductResponse(**result.data[0])

        except Exception as e:
            logger.error(
                "get_product_by_code_failed",
                product_code=product_code,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: ProductCreate) -> ProductResponse:
        """
        Create a new product.

        The product code is derived from the name when not supplied.

        Raises:
            ProductCodeExistsError: If product code already exists
        """
        product_code = data.product_code or generate_product_code(data.name)
        logger.info("creating_product", name=data.name, product_code=product_code)

        if self.get_by_product_code(product_code):
            raise ProductCodeExistsError(product_code)

        try:
            insert_data = {
                "name": data.name,
                "description": data.description,
                "category_id": data.category_id,
                "product_code": product_code,
                "status": data.status.value,
                "featured": data.featured,
                "image_url": data.image_url,
            }

            result = (
                self.db.table(self.table)
                .insert(insert_data)
                .execute()
            )

            product = ProductResponse(**result.data[0])

            logger.info(
                "product_created",
                product_id=product.id,
                product_code=product.product_code
            )

            return product

        except Exception as e:
            logger.error(
                "create_product_failed",
                name=data.name,
                error=str(e)
            )
            raise DatabaseError("insert", str(e))

    def update(self, product_id: str, data: ProductUpdate) -> ProductResponse:
        """
        Update an existing product.

        Raises:
            ProductNotFoundError: If product doesn't exist
            ProductCodeExistsError: If new product code already exists
        """
        logger.info("updating_product", product_id=product_id)

        existing = self.get_by_id(product_id)

        if data.product_code and data.product_code != existing.product_code:
            if self.get_by_product_code(data.product_code):
                raise ProductCodeExistsError(data.product_code)

        update_data = data.model_dump(exclude_none=True, mode="json")
        if not update_data:
            return existing

        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", product_id)
                .execute()
            )

            product = ProductResponse(**result.data[0])

            logger.info(
                "product_updated",
                product_id=product_id,
                fields=list(update_data.keys())
            )

            return product

        except Exception as e:
            logger.error(
                "update_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("update", str(e))

    def delete(self, product_id: str) -> bool:
        """
        Soft delete a product (set status=inactive).

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.info("deleting_product", product_id=product_id)

        self.get_by_id(product_id)

        try:
            self.db.table(self.table).update(
                {"status": ProductStatus.INACTIVE.value}
            ).eq("id", product_id).execute()

            logger.info("product_deleted", product_id=product_id)

            return True

        except Exception as e:
            logger.error(
                "delete_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("update", str(e))

    # ===================
    # UTILITY METHODS
    # ===================

    def count(self, status: Optional[ProductStatus] = ProductStatus.ACTIVE) -> int:
        """Count products, optionally by status."""
        try:
            query = self.db.table(self.table).select("id", count="exact")
            if status:
                query = query.eq("status", status.value)
            result = query.execute()
            return result.count or 0
        except Exception as e:
            logger.error("count_products_failed", error=str(e))
            raise DatabaseError("count", str(e))


def filter_products(
    products: Iterable[ProductResponse],
    search: Optional[str] = None,
    category_id: Optional[str] = None
) -> list[ProductResponse]:
    """
    Filter products in memory, as the storefront catalog search does.

    Search matches a case- and accent-insensitive substring of the name,
    description or product code.
    """
    needle = normalize_search_text(search)

    def matches(product: ProductResponse) -> bool:
        if category_id and product.category_id != category_id:
            return False
        if not needle:
            return True
        return any(
            needle in normalize_search_text(text)
            for text in (product.name, product.description, product.product_code)
        )

    return [p for p in products if matches(p)]


# Singleton instance for convenience
_product_service: Optional[ProductService] = None

def get_product_service() -> ProductService:
    """Get or create ProductService instance."""
    global _product_service
    if _product_service is None:
        _product_service = ProductService()
    return _product_service
