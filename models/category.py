"""
Category schemas.
"""

from pydantic import Field
from typing import Optional
from enum import Enum

from models.base import BaseSchema, TimestampMixin


class MoveDirection(str, Enum):
    """Direction for reordering a category."""
    UP = "up"
    DOWN = "down"


class CategoryCreate(BaseSchema):
    """Create a category; slug and display_order are assigned by the service."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Category display name",
        examples=["Foam Pads", "Wax & Sealants"]
    )
    description: Optional[str] = Field(None, description="Category description")


class CategoryResponse(BaseSchema, TimestampMixin):
    """Category as stored in categories."""

    id: str
    name: str
    slug: str
    description: Optional[str] = None
    display_order: Optional[int] = None


class CategoryMoveRequest(BaseSchema):
    """Move a category one position up or down."""

    direction: MoveDirection
