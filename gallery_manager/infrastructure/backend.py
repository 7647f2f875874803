"""Storage backend - one record store paired with one asset store.

GalleryBackend is the only persistence surface the application layer sees.
Which record store and asset store sit behind it is decided once, at
configuration time, by create_backend().
"""
from __future__ import annotations

import logging
import mimetypes
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .. import config
from ..domain import BackendUnavailable, Category, GalleryItem, NotFound
from .database import open_database
from .repositories import GalleryRepository, GalleryStore, JsonGalleryRepository
from .storage import AssetStore, StorageError, get_asset_store

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(action: str):
    """Re-raise transport-level failures as BackendUnavailable."""
    try:
        yield
    except (sqlite3.Error, OSError, StorageError, KeyError, ValueError) as e:
        logger.error("Backend failure while %s: %s", action, e, exc_info=True)
        raise BackendUnavailable(f"Failed {action}: {e}") from e


def _to_item(record: dict) -> GalleryItem:
    """Decode a stored record. A record that no longer decodes is a store fault."""
    try:
        return GalleryItem.model_validate(record)
    except ValidationError as e:
        logger.error("Undecodable record %s: %s", record.get("id"), e)
        raise BackendUnavailable(f"Corrupt record {record.get('id')}: {e}") from e


class GalleryBackend:
    """Capability set the gallery client depends on."""

    def __init__(self, store: GalleryStore, assets: AssetStore):
        self.store = store
        self.assets = assets

    async def list(self, category: Optional[Category] = None) -> list[GalleryItem]:
        with _translate_errors("listing items"):
            records = await self.store.list_all(category.value if category else None)
        return [_to_item(r) for r in records]

    async def get(self, item_id: str) -> Optional[GalleryItem]:
        with _translate_errors(f"fetching item {item_id}"):
            record = await self.store.get_by_id(item_id)
        return _to_item(record) if record else None

    async def insert(self, fields: dict) -> GalleryItem:
        with _translate_errors("inserting item"):
            record = await self.store.create(fields)
        return _to_item(record)

    async def insert_many(self, fields_list: list[dict]) -> list[GalleryItem]:
        """Insert several records.

        Atomic for both bundled record stores, but callers must not
        rely on that for other stores.
        """
        with _translate_errors(f"inserting {len(fields_list)} items"):
            records = await self.store.create_many(fields_list)
        return [_to_item(r) for r in records]

    async def update(self, item_id: str, fields: dict) -> GalleryItem:
        with _translate_errors(f"updating item {item_id}"):
            record = await self.store.update(item_id, fields)
        if record is None:
            raise NotFound(item_id)
        return _to_item(record)

    async def delete(self, item_id: str) -> None:
        with _translate_errors(f"deleting item {item_id}"):
            deleted = await self.store.delete(item_id)
        if not deleted:
            raise NotFound(item_id)

    async def upload_asset(
        self,
        content: bytes,
        content_type: str,
        filename: Optional[str] = None
    ) -> str:
        """Store image bytes and return a URL that resolves to them."""
        ext = Path(filename).suffix.lower() if filename else ""
        if not ext:
            ext = mimetypes.guess_extension(content_type or "") or ""
        file_id = f"{uuid.uuid4().hex}{ext}"

        with _translate_errors(f"uploading {filename or file_id}"):
            return await self.assets.save(file_id, content, content_type)

    async def remove_asset(self, url: str) -> bool:
        """Best-effort removal of the bytes behind url. Never raises."""
        file_id = self.assets.file_id_from_url(url)
        if not file_id:
            return False
        try:
            return await self.assets.remove(file_id)
        except Exception as e:
            logger.warning("Failed to remove asset %s: %s", url, e, exc_info=True)
            return False

    async def close(self) -> None:
        await self.store.close()


async def create_backend(
    record_store: Optional[str] = None,
    assets: Optional[AssetStore] = None
) -> GalleryBackend:
    """Build the configured backend.

    Args:
        record_store: 'sqlite' or 'json' (default: config.RECORD_STORE)
        assets: Asset store (default: get_asset_store())
    """
    record_store = (record_store or config.RECORD_STORE).lower()
    assets = assets or get_asset_store()

    if record_store == "sqlite":
        store = GalleryRepository(await open_database(config.DATABASE_PATH))
    elif record_store == "json":
        store = JsonGalleryRepository(config.GALLERY_JSON_PATH)
    else:
        raise ValueError(f"Unknown record store: {record_store}")

    logger.info("Gallery backend: %s records, %s assets",
                record_store, type(assets).__name__)
    return GalleryBackend(store, assets)
