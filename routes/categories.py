"""
Category API routes.
"""

from fastapi import APIRouter
import structlog

from models.category import CategoryCreate, CategoryResponse, CategoryMoveRequest
from services.category_service import get_category_service
from routes.products import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
async def list_categories():
    """List categories in display order."""
    try:
        return get_category_service().get_all()

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(data: CategoryCreate):
    """
    Create a category at the end of the display order.

    Raises:
        409: Slug already exists
        422: Name has no letters or digits
    """
    try:
        return get_category_service().create(data)

    except Exception as e:
        return handle_error(e)


@router.delete("/{category_id}", status_code=204)
async def delete_category(category_id: str):
    """
    Delete a category.

    Raises:
        404: Category not found
    """
    try:
        get_category_service().delete(category_id)
        return None  # 204 No Content

    except Exception as e:
        return handle_error(e)


@router.post("/{category_id}/move", response_model=list[CategoryResponse])
async def move_category(category_id: str, data: CategoryMoveRequest):
    """
    Move a category one position up or down.

    Returns all categories in the new order.
    """
    try:
        return get_category_service().move(category_id, data.direction)

    except Exception as e:
        return handle_error(e)
