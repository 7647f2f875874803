"""Upload service - validates candidate files and drives batch creates.

Nothing reaches the backend until the batch has passed validation:
files are filtered by type and size, titles are derived from file
names, and an empty selection or missing category stops the upload.
"""
import logging
import re
from typing import Optional, Sequence

from ... import config
from ...domain import (
    CandidateFile,
    CategoryLike,
    GalleryItem,
    GalleryUploadRequest,
    ValidationFailed,
    parse_category,
)
from .gallery_service import GalleryService

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def default_title(filename: str) -> str:
    """File name without its last extension ("beach.day.jpg" -> "beach.day")."""
    return _EXTENSION_RE.sub("", filename or "") or filename


class UploadService:
    """Service for validating and submitting uploads.

    Responsibilities:
    - File validation (type, size)
    - Default titles
    - Batch preconditions (non-empty selection, concrete category)
    """

    def __init__(
        self,
        gallery_service: GalleryService,
        allowed_types: Optional[set[str]] = None,
        max_size: Optional[int] = None
    ):
        self.gallery = gallery_service
        self.allowed_types = config.ALLOWED_IMAGE_TYPES if allowed_types is None else allowed_types
        self.max_size = config.MAX_UPLOAD_SIZE if max_size is None else max_size

    def rejection_reason(self, file: CandidateFile) -> Optional[str]:
        """Why file would be rejected, or None if it is accepted."""
        if file.content_type not in self.allowed_types:
            return f"unsupported type {file.content_type}"
        if file.size > self.max_size:
            return f"{file.size} bytes exceeds {self.max_size}"
        return None

    def is_accepted(self, file: CandidateFile) -> bool:
        """Accept rule. Logs the reason for a rejected file."""
        reason = self.rejection_reason(file)
        if reason:
            logger.info("Dropping %s: %s", file.filename, reason)
        return reason is None

    def select_files(self, files: Sequence[CandidateFile]) -> list[CandidateFile]:
        """Keep accepted files. Rejected files are dropped, not reported."""
        return [file for file in files if self.is_accepted(file)]

    def build_requests(
        self,
        files: Sequence[CandidateFile],
        category: Optional[CategoryLike],
        description: Optional[str] = None,
        titles: Optional[Sequence[Optional[str]]] = None
    ) -> list[GalleryUploadRequest]:
        """Validate the selection and turn it into upload requests.

        Args:
            files: Candidate files as selected by the user
            category: Category applied to every file
            description: Optional description applied to every file
            titles: Optional explicit titles, parallel to files

        Raises:
            ValidationFailed: No acceptable file, or no valid category
        """
        if titles is not None and len(titles) != len(files):
            raise ValidationFailed("titles must match files one to one")

        if titles is None:
            titles = [None] * len(files)
        accepted = [(f, t) for f, t in zip(files, titles) if self.is_accepted(f)]

        if not accepted:
            raise ValidationFailed("Please select at least one JPG, PNG or GIF up to 10MB")
        if not category:
            raise ValidationFailed("Please select a category")
        category = parse_category(category)

        return [
            GalleryUploadRequest(
                title=(title or "").strip() or default_title(file.filename),
                category=category,
                description=description or "",
                filename=file.filename,
                content_type=file.content_type,
                content=file.content,
                size=file.size,
            )
            for file, title in accepted
        ]

    async def upload(
        self,
        files: Sequence[CandidateFile],
        category: Optional[CategoryLike],
        description: Optional[str] = None,
        titles: Optional[Sequence[Optional[str]]] = None
    ) -> list[GalleryItem]:
        """Validate files and create one item per accepted file.

        Raises:
            ValidationFailed: Before contacting the backend
            PartialBatchFailure: If the batch create fails
        """
        requests = self.build_requests(files, category, description, titles)
        items = await self.gallery.create_items_batch(requests)
        logger.info("Uploaded %d image(s) to %s", len(items), requests[0].category.value)
        return items

    async def upload_one(
        self,
        file: CandidateFile,
        category: Optional[CategoryLike],
        title: Optional[str] = None,
        description: Optional[str] = None
    ) -> GalleryItem:
        """Create a single item, reporting why a rejected file was refused.

        Raises:
            ValidationFailed: File rejected, or no valid category
        """
        reason = self.rejection_reason(file)
        if reason:
            raise ValidationFailed(f"Rejected {file.filename}: {reason}")
        request = self.build_requests([file], category, description, [title])[0]
        return await self.gallery.create_item(request)
