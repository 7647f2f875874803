"""Inline asset store - the image travels inside its URL as a data URI.

Nothing is written server-side, matching clients that keep the whole
gallery in browser storage: a record's ``image_url`` is the image.
"""
import base64
from typing import Optional

from .base import AssetNotFound, AssetStore


class InlineAssetStore(AssetStore):

    accepts = ("inline",)

    async def save(self, file_id: str, content: bytes, content_type: Optional[str] = None) -> str:
        encoded = base64.b64encode(content).decode("ascii")
        return f"data:{content_type or 'application/octet-stream'};base64,{encoded}"

    async def read(self, file_id: str) -> bytes:
        raise AssetNotFound(file_id)

    async def remove(self, file_id: str) -> bool:
        return False

    def exists(self, file_id: str) -> bool:
        return False

    def url_for(self, file_id: str, expires: Optional[int] = None) -> str:
        raise AssetNotFound(file_id)

    def file_id_from_url(self, url: str) -> Optional[str]:
        # The bytes die with the record
        return None
