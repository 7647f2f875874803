"""Domain layer - gallery entities, categories and error kinds."""
from .errors import (
    GalleryError,
    ValidationFailed,
    NotFound,
    BackendUnavailable,
    PartialBatchFailure,
)
from .models import (
    ALL_CATEGORIES,
    Category,
    CategoryLike,
    CandidateFile,
    GalleryItem,
    GalleryUploadRequest,
    parse_category,
    parse_category_filter,
)

__all__ = [
    "GalleryError",
    "ValidationFailed",
    "NotFound",
    "BackendUnavailable",
    "PartialBatchFailure",
    "ALL_CATEGORIES",
    "Category",
    "CategoryLike",
    "CandidateFile",
    "GalleryItem",
    "GalleryUploadRequest",
    "parse_category",
    "parse_category_filter",
]
