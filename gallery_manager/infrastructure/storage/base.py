"""Asset store interface: where the image bytes behind image_url live."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse, unquote


class StorageError(Exception):
    """Base exception for asset store operations."""
    pass


class AssetNotFound(StorageError):
    """No stored bytes for the requested file id."""
    pass


class UploadError(StorageError):
    pass


class ReadError(StorageError):
    pass


class DeleteError(StorageError):
    pass


@dataclass
class AssetStoreConfig:
    """Which asset store to build and how to reach it."""
    backend: str  # 'local', 's3', 'minio', 'inline'

    # Key prefix / subdirectory for gallery images
    folder: str = "uploads"

    # local
    base_path: Optional[Path] = None

    # s3 / minio
    endpoint_url: Optional[str] = None
    bucket_name: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    region: str = "us-east-1"
    use_ssl: bool = True
    # CDN or public bucket base; defaults to endpoint/bucket
    public_url: Optional[str] = None
    # Private bucket: presigned URL lifetime in seconds. None means public objects
    url_expiry: Optional[int] = None


class AssetStore(ABC):
    """Stores image bytes under a file id and hands out URLs for them.

    Implementations:
    - LocalAssetStore: files on disk, served by the API under /uploads
    - S3AssetStore: AWS S3 / MinIO bucket
    - InlineAssetStore: nothing stored, the URL is a data URI
    """

    #: config.backend values this store can be built from
    accepts: tuple = ()

    def __init__(self, config: AssetStoreConfig):
        if config.backend not in self.accepts:
            raise ValueError(
                f"{type(self).__name__} cannot serve backend '{config.backend}'"
            )
        self.config = config
        self.folder = config.folder

    @abstractmethod
    async def save(self, file_id: str, content: bytes, content_type: Optional[str] = None) -> str:
        """Store content and return a URL that resolves to it.

        Raises:
            UploadError: If the bytes could not be written
        """

    @abstractmethod
    async def read(self, file_id: str) -> bytes:
        """Raises AssetNotFound or ReadError."""

    @abstractmethod
    async def remove(self, file_id: str) -> bool:
        """Delete stored bytes.

        Returns:
            True if something was removed, False if nothing was stored

        Raises:
            DeleteError: If the bytes exist but could not be removed
        """

    @abstractmethod
    def exists(self, file_id: str) -> bool:
        ...

    @abstractmethod
    def url_for(self, file_id: str, expires: Optional[int] = None) -> str:
        ...

    def local_path(self, file_id: str) -> Optional[Path]:
        """Filesystem path of a stored file, for stores that have one."""
        return None

    @staticmethod
    def safe_id(file_id: str) -> str:
        # Strip directory parts so an id can never leave the store
        return Path(file_id).name

    def file_id_from_url(self, url: str) -> Optional[str]:
        """Recover the file id from a URL returned by save().

        The id is the last path segment; query strings of presigned
        URLs are ignored. Returns None when the URL carries no id.
        """
        if not url:
            return None
        segment = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
        return unquote(segment) or None
