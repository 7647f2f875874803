"""File serving routes - images kept by the asset store."""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, RedirectResponse

from ...dependencies import get_backend
from ...infrastructure import GalleryBackend

router = APIRouter()


@router.get("/uploads/{file_id}")
async def get_upload(file_id: str, backend: GalleryBackend = Depends(get_backend)):
    """Serve an uploaded image.

    Files on local disk are returned directly; object storage gets a
    redirect to a short-lived presigned URL.
    """
    assets = backend.assets
    if file_id != assets.safe_id(file_id) or not assets.exists(file_id):
        raise HTTPException(status_code=404)

    path = assets.local_path(file_id)
    if path is None:
        expires = assets.config.url_expiry or 3600
        return RedirectResponse(url=assets.url_for(file_id, expires=expires))
    return FileResponse(path)
