"""Asset stores for gallery images.

Backends: local filesystem, S3/MinIO, inline data URIs.
"""
from .base import (
    AssetNotFound,
    AssetStore,
    AssetStoreConfig,
    DeleteError,
    ReadError,
    StorageError,
    UploadError,
)
from .local import LocalAssetStore
from .inline import InlineAssetStore
from .factory import (
    asset_store_config_from_env,
    create_asset_store,
    get_asset_store,
    reset_asset_store,
)

__all__ = [
    "AssetNotFound",
    "AssetStore",
    "AssetStoreConfig",
    "DeleteError",
    "ReadError",
    "StorageError",
    "UploadError",
    "LocalAssetStore",
    "InlineAssetStore",
    "asset_store_config_from_env",
    "create_asset_store",
    "get_asset_store",
    "reset_asset_store",
]
