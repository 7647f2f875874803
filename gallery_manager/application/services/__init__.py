"""Application services - business logic layer."""

from .gallery_service import GalleryService
from .upload_service import UploadService, default_title

__all__ = [
    "GalleryService",
    "UploadService",
    "default_title",
]
