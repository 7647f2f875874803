"""Gallery service - CRUD over whichever backend is configured.

This service is a stateless facade: it validates arguments, talks to
the GalleryBackend and hands back GalleryItem models. It owns no data.
"""
import asyncio
import logging
from collections import Counter
from typing import Optional, Sequence

from ...domain import (
    Category,
    CategoryLike,
    GalleryError,
    GalleryItem,
    GalleryUploadRequest,
    NotFound,
    PartialBatchFailure,
    ValidationFailed,
    parse_category,
    parse_category_filter,
)
from ...infrastructure import GalleryBackend
from ...infrastructure.repositories import WRITABLE_FIELDS

logger = logging.getLogger(__name__)


class GalleryService:
    """Service for listing and mutating gallery items.

    Responsibilities:
    - Category filtering and validation
    - Upload-then-persist for single and batch creates
    - Best-effort asset cleanup on delete
    - Category counts
    """

    def __init__(self, backend: GalleryBackend):
        self.backend = backend

    async def list_items(self, category: Optional[CategoryLike] = None) -> list[GalleryItem]:
        """List items, newest first.

        Args:
            category: Concrete category, "All Categories", or None for all

        Raises:
            ValidationFailed: If category is not a known category
        """
        return await self.backend.list(parse_category_filter(category))

    async def get_item(self, item_id: str) -> Optional[GalleryItem]:
        """Get one item, or None when no record matches."""
        return await self.backend.get(item_id)

    async def create_item(self, request: GalleryUploadRequest) -> GalleryItem:
        """Upload the file, then persist metadata pointing at it.

        If persisting fails the uploaded asset is removed again, so a
        failed create leaves neither a record nor an orphaned file behind.
        """
        fields = self._fields_for(request)
        image_url = await self.backend.upload_asset(
            request.content, request.content_type, request.filename
        )
        try:
            return await self.backend.insert({**fields, "image_url": image_url})
        except Exception:
            await self.backend.remove_asset(image_url)
            raise

    async def create_items_batch(
        self,
        requests: Sequence[GalleryUploadRequest]
    ) -> list[GalleryItem]:
        """Upload every file concurrently, then persist all records at once.

        The batch succeeds or fails as a whole. All uploads are allowed to
        settle before the outcome is decided; on failure the first error is
        raised as PartialBatchFailure with the indices whose upload finished.

        Assets uploaded for the successful indices of a failed batch are
        left in place.

        Raises:
            ValidationFailed: Before any upload, if a request is invalid
            PartialBatchFailure: If any upload or the final insert fails
        """
        if not requests:
            raise ValidationFailed("No files to upload")
        fields_list = [self._fields_for(request) for request in requests]

        results = await asyncio.gather(
            *(
                self.backend.upload_asset(r.content, r.content_type, r.filename)
                for r in requests
            ),
            return_exceptions=True
        )

        succeeded = [i for i, result in enumerate(results) if not isinstance(result, BaseException)]
        for index, result in enumerate(results):
            if isinstance(result, BaseException):
                logger.error(
                    "Batch upload failed at index %d (%d of %d uploaded): %s",
                    index, len(succeeded), len(requests), result
                )
                raise PartialBatchFailure(result, index, succeeded) from result

        for fields, image_url in zip(fields_list, results):
            fields["image_url"] = image_url

        try:
            return await self.backend.insert_many(fields_list)
        except GalleryError as e:
            logger.error("Batch insert of %d items failed: %s", len(fields_list), e)
            raise PartialBatchFailure(e, None, []) from e

    async def update_item(self, item_id: str, **fields) -> GalleryItem:
        """Update some fields of an item.

        Raises:
            ValidationFailed: Unknown or read-only field, or bad category
            NotFound: If item_id does not exist
        """
        unknown = set(fields) - set(WRITABLE_FIELDS)
        if unknown:
            raise ValidationFailed(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        if "category" in fields:
            fields["category"] = parse_category(fields["category"]).value
        if "title" in fields and not (fields["title"] or "").strip():
            raise ValidationFailed("Title cannot be empty")
        if "image_url" in fields and not fields["image_url"]:
            raise ValidationFailed("Image URL cannot be empty")
        if "description" in fields and fields["description"] is None:
            fields["description"] = ""

        return await self.backend.update(item_id, fields)

    async def delete_item(self, item_id: str) -> None:
        """Delete an item, then try to remove its image.

        Raises:
            NotFound: If item_id does not exist
        """
        item = await self.backend.get(item_id)
        if item is None:
            raise NotFound(item_id)

        await self.backend.delete(item_id)

        if item.image_url and not await self.backend.remove_asset(item.image_url):
            logger.debug("No stored image removed for item %s", item_id)

    async def count_by_category(self) -> dict[Category, int]:
        """Tally items per category. Categories without items are omitted."""
        items = await self.backend.list()
        return dict(Counter(item.category for item in items))

    def _fields_for(self, request: GalleryUploadRequest) -> dict:
        title = (request.title or "").strip()
        if not title:
            raise ValidationFailed("Title is required")
        if not request.content:
            raise ValidationFailed(f"Empty file: {request.filename}")
        return {
            "title": title,
            "category": parse_category(request.category).value,
            "description": request.description or "",
        }
