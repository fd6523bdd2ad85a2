"""
Category service.

Categories are ordered by display_order (1-based); new categories go last.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.category import CategoryCreate, CategoryResponse, MoveDirection
from exceptions import (
    CategoryNotFoundError,
    CategorySlugExistsError,
    ValidationError,
    DatabaseError
)
from utils.text_utils import generate_slug

logger = structlog.get_logger(__name__)


class CategoryService:
    """
    Category business logic.

    Handles listing, creation, deletion and reordering.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "categories"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self) -> list[CategoryResponse]:
        """Get all categories in display order."""
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("display_order")
                .execute()
            )
            return [CategoryResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("get_categories_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, category_id: str) -> CategoryResponse:
        """
        Get a category by ID.

        Raises:
            CategoryNotFoundError: If the category doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", category_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_category_failed", category_id=category_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise CategoryNotFoundError(category_id)

        return CategoryResponse(**result.data[0])

    def get_by_slug(self, slug: str) -> Optional[CategoryResponse]:
        """Get a category by slug, or None."""
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("slug", slug)
                .execute()
            )
        except Exception as e:
            logger.error("get_category_by_slug_failed", slug=slug, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            return None
        return CategoryResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: CategoryCreate) -> CategoryResponse:
        """
        Create a category at the end of the display order.

        Raises:
            ValidationError: If the name yields an empty slug
            CategorySlugExistsError: If the slug is taken
        """
        slug = generate_slug(data.name)
        logger.info("creating_category", name=data.name, slug=slug)

        if not slug:
            raise ValidationError(
                message="Category name must contain letters or digits",
                code="CATEGORY_INVALID_NAME",
                details={"name": data.name}
            )

        if self.get_by_slug(slug):
            raise CategorySlugExistsError(slug)

        existing = self.get_all()
        next_order = max((c.display_order or 0) for c in existing) + 1 if existing else 1

        try:
            result = self.db.table(self.table).insert({
                "name": data.name,
                "slug": slug,
                "description": data.description,
                "display_order": next_order,
            }).execute()
            category = CategoryResponse(**result.data[0])
        except Exception as e:
            logger.error("create_category_failed", slug=slug, error=str(e))
            raise DatabaseError("insert", str(e))

        logger.info("category_created", category_id=category.id, display_order=next_order)
        return category

    def delete(self, category_id: str) -> bool:
        """
        Delete a category.

        Raises:
            CategoryNotFoundError: If the category doesn't exist
        """
        logger.info("deleting_category", category_id=category_id)

        self.get_by_id(category_id)

        try:
            self.db.table(self.table).delete().eq("id", category_id).execute()
        except Exception as e:
            logger.error("delete_category_failed", category_id=category_id, error=str(e))
            raise DatabaseError("delete", str(e))

        logger.info("category_deleted", category_id=category_id)
        return True

    def move(self, category_id: str, direction: MoveDirection) -> list[CategoryResponse]:
        """
        Swap a category's display_order with its neighbour.

        Moving the first category up or the last one down changes nothing.

        Returns:
            All categories in their new display order

        Raises:
            CategoryNotFoundError: If the category doesn't exist
        """
        categories = self.get_all()
        index = next((i for i, c in enumerate(categories) if c.id == category_id), None)
        if index is None:
            raise CategoryNotFoundError(category_id)

        target = index - 1 if direction == MoveDirection.UP else index + 1
        if target < 0 or target >= len(categories):
            logger.debug("category_move_noop", category_id=category_id, direction=direction.value)
            return categories

        current, neighbour = categories[index], categories[target]
        current_order = current.display_order or 0
        neighbour_order = neighbour.display_order or 0

        try:
            self.db.table(self.table).update(
                {"display_order": current_order}
            ).eq("id", neighbour.id).execute()
            self.db.table(self.table).update(
                {"display_order": neighbour_order}
            ).eq("id", current.id).execute()
        except Exception as e:
            logger.error("move_category_failed", category_id=category_id, error=str(e))
            raise DatabaseError("update", str(e))

        current.display_order = neighbour_order
        neighbour.display_order = current_order
        categories[index], categories[target] = neighbour, current

        logger.info(
            "category_moved",
            category_id=category_id,
            direction=direction.value,
            display_order=neighbour_order
        )
        return categories


# Singleton instance for convenience
_category_service: Optional[CategoryService] = None

def get_category_service() -> CategoryService:
    """Get or create CategoryService instance."""
    global _category_service
    if _category_service is None:
        _category_service = CategoryService()
    return _category_service
