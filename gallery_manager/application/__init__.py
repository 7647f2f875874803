"""Application layer - business logic services.

This layer contains application services that orchestrate domain operations.
Services are independent of HTTP/FastAPI and can be tested in isolation.
"""

from .services import GalleryService, UploadService
from .view_model import GalleryViewModel, ViewState

__all__ = [
    "GalleryService",
    "UploadService",
    "GalleryViewModel",
    "ViewState",
]
