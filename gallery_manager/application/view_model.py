"""Gallery view model - the in-memory working copy behind a gallery screen.

The view model owns the list currently on display, the active category
filter and the loading/error state. Every change to persisted data goes
through GalleryService; the local list is only ever replaced by a fetch
result or trimmed after a confirmed delete.
"""
import asyncio
import inspect
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Union

from ..domain import ALL_CATEGORIES, CategoryLike, GalleryError, GalleryItem
from .services.gallery_service import GalleryService

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load gallery images. Please try again."
DELETE_FAILED_MESSAGE = "Failed to delete image. Please try again."

ConfirmCallback = Callable[[GalleryItem], Union[bool, Awaitable[bool]]]


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class GalleryViewModel:
    """Filterable gallery list with last-request-wins refreshes.

    Each refresh takes a sequence number; a response whose number is no
    longer the latest is dropped, so a slow request for an old filter can
    never overwrite the result for the current one.
    """

    def __init__(self, gallery_service: GalleryService, category: Optional[CategoryLike] = None):
        self.service = gallery_service
        self.category: CategoryLike = category or ALL_CATEGORIES
        self.items: list[GalleryItem] = []
        self.state = ViewState.IDLE
        self.error: Optional[str] = None
        self.notice: Optional[str] = None
        self._request_seq = 0
        self._delete_lock = asyncio.Lock()

    @property
    def total_images(self) -> int:
        return len(self.items)

    @property
    def is_loading(self) -> bool:
        return self.state == ViewState.LOADING

    async def refresh(self) -> bool:
        """Fetch the list for the current filter.

        Returns:
            True if this response was applied, False if it failed or was
            superseded by a later refresh
        """
        self._request_seq += 1
        seq = self._request_seq
        self.state = ViewState.LOADING

        try:
            items = await self.service.list_items(self.category)
        except GalleryError as e:
            if seq != self._request_seq:
                logger.debug("Discarding stale failure for request %d", seq)
                return False
            logger.error("Failed to load gallery for %s: %s", self.category, e)
            self.state = ViewState.ERROR
            self.error = LOAD_FAILED_MESSAGE
            return False

        if seq != self._request_seq:
            logger.debug("Discarding stale response for request %d", seq)
            return False

        self.items = items
        self.state = ViewState.LOADED
        self.error = None
        return True

    async def set_category(self, category: CategoryLike) -> bool:
        """Switch the filter and reload."""
        self.category = category or ALL_CATEGORIES
        self.error = None
        self.notice = None
        return await self.refresh()

    async def request_delete(self, item_id: str, confirm: ConfirmCallback) -> bool:
        """Delete an item after the user confirms it.

        Args:
            item_id: Item to delete
            confirm: Called with the item; may return a bool or an awaitable

        Returns:
            True if the item was deleted
        """
        async with self._delete_lock:
            item = next((i for i in self.items if i.id == item_id), None)
            if item is None:
                logger.debug("Delete requested for item %s not in view", item_id)
                return False

            answer = confirm(item)
            if inspect.isawaitable(answer):
                answer = await answer
            if not answer:
                return False

            try:
                await self.service.delete_item(item_id)
            except GalleryError as e:
                logger.error("Failed to delete item %s: %s", item_id, e)
                self.notice = DELETE_FAILED_MESSAGE
                return False

            self.items = [i for i in self.items if i.id != item_id]
            self.notice = None
            return True

    def dismiss_notice(self) -> None:
        self.notice = None
