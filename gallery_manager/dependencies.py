"""Shared FastAPI dependencies."""
from fastapi import Depends, Request

from .application.services import GalleryService, UploadService
from .infrastructure import GalleryBackend


def get_backend(request: Request) -> GalleryBackend:
    """Get the backend opened by the application lifespan."""
    return request.app.state.backend


def get_gallery_service(backend: GalleryBackend = Depends(get_backend)) -> GalleryService:
    """Create GalleryService over the configured backend."""
    return GalleryService(backend)


def get_upload_service(
    gallery_service: GalleryService = Depends(get_gallery_service)
) -> UploadService:
    """Create UploadService with the default accept rule."""
    return UploadService(gallery_service)
