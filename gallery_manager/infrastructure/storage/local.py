"""Asset store on the local filesystem."""
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from ... import config as app_config
from .base import AssetNotFound, AssetStore, AssetStoreConfig, DeleteError, ReadError, UploadError


class LocalAssetStore(AssetStore):
    """Keeps images as plain files under ``<base_path>/<folder>/``.

    URLs are relative (``/uploads/<file_id>``); the API serves them.
    """

    accepts = ("local",)

    def __init__(self, config: AssetStoreConfig):
        super().__init__(config)
        self.root = Path(config.base_path or app_config.DATA_DIR) / self.folder
        self.root.mkdir(parents=True, exist_ok=True)

    def local_path(self, file_id: str) -> Path:
        return self.root / self.safe_id(file_id)

    async def save(self, file_id: str, content: bytes, content_type: Optional[str] = None) -> str:
        try:
            async with aiofiles.open(self.local_path(file_id), "wb") as f:
                await f.write(content)
        except OSError as e:
            raise UploadError(f"Could not write {file_id}: {e}") from e
        return self.url_for(file_id)

    async def read(self, file_id: str) -> bytes:
        path = self.local_path(file_id)
        if not path.is_file():
            raise AssetNotFound(file_id)
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except OSError as e:
            raise ReadError(f"Could not read {file_id}: {e}") from e

    async def remove(self, file_id: str) -> bool:
        path = self.local_path(file_id)
        if not path.exists():
            return False
        try:
            await aiofiles.os.remove(path)
        except OSError as e:
            raise DeleteError(f"Could not delete {file_id}: {e}") from e
        return True

    def exists(self, file_id: str) -> bool:
        return self.local_path(file_id).is_file()

    def url_for(self, file_id: str, expires: Optional[int] = None) -> str:
        return f"/{self.folder}/{self.safe_id(file_id)}"
