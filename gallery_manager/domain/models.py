"""Gallery domain models.

GalleryItem is the single persisted entity. GalleryUploadRequest and
CandidateFile are ephemeral and never stored as-is.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel

from .errors import ValidationFailed


# Filter-only sentinel, never stored on an item
ALL_CATEGORIES = "All Categories"


class Category(str, Enum):
    """Fixed set of gallery categories."""
    EVENTS = "Events"
    CAUSES = "Causes"
    VOLUNTEERS = "Volunteers"
    COMMUNITY = "Community"
    ENVIRONMENT = "Environment"
    HEALTHCARE = "Healthcare"
    FUNDRAISING = "Fundraising"
    TEAM = "Team"


CategoryLike = Union[Category, str]


def parse_category(value: Optional[CategoryLike]) -> Category:
    """Return the concrete Category for value.

    Raises:
        ValidationFailed: If value is empty, the "all" sentinel,
            or not one of the known categories.
    """
    if isinstance(value, Category):
        return value
    if not value:
        raise ValidationFailed("Category is required")
    if value == ALL_CATEGORIES:
        raise ValidationFailed(f"'{ALL_CATEGORIES}' is a filter, not a category")
    try:
        return Category(value)
    except ValueError:
        raise ValidationFailed(f"Unknown category: {value}")


def parse_category_filter(value: Optional[CategoryLike]) -> Optional[Category]:
    """Normalize a list filter. None means no filtering."""
    if value is None or value == "" or value == ALL_CATEGORIES:
        return None
    return parse_category(value)


class GalleryItem(BaseModel):
    """One gallery entry as stored by a backend."""
    id: str
    title: str
    category: Category
    description: str = ""
    image_url: str
    created_at: datetime
    updated_at: datetime
    user_id: Optional[str] = None


@dataclass
class CandidateFile:
    """A user-selected file before validation."""
    filename: str
    content_type: str
    content: bytes
    size: Optional[int] = None

    def __post_init__(self):
        if self.size is None:
            self.size = len(self.content)


@dataclass
class GalleryUploadRequest:
    """Everything needed to create one item: metadata plus raw bytes."""
    title: str
    category: Category
    filename: str
    content_type: str
    content: bytes = field(repr=False)
    description: str = ""
    size: Optional[int] = None

    def __post_init__(self):
        if self.size is None:
            self.size = len(self.content)
