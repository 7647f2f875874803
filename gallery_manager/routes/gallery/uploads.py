"""Upload routes - single and batch image uploads."""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ...application.services import UploadService
from ...dependencies import get_upload_service
from ...domain import CandidateFile, GalleryItem

router = APIRouter(prefix="/api/gallery")


async def _to_candidate(file: UploadFile) -> CandidateFile:
    content = await file.read()
    return CandidateFile(
        filename=file.filename or "",
        content_type=file.content_type or "application/octet-stream",
        content=content,
    )


@router.post("", status_code=201, response_model=GalleryItem)
async def upload_item(
    file: UploadFile = File(...),
    category: str = Form(...),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    service: UploadService = Depends(get_upload_service)
):
    """Upload one image. The title defaults to the file name."""
    candidate = await _to_candidate(file)
    return await service.upload_one(candidate, category, title=title, description=description)


@router.post("/batch", status_code=201, response_model=list[GalleryItem])
async def upload_batch(
    files: List[UploadFile] = File(...),
    category: str = Form(...),
    description: Optional[str] = Form(None),
    service: UploadService = Depends(get_upload_service)
):
    """Upload several images into one category.

    Files that are not JPG, PNG or GIF or exceed 10MB are skipped.
    """
    candidates = [await _to_candidate(f) for f in files]
    return await service.upload(candidates, category, description=description)
