"""Factory for the configured asset store."""
import os
from pathlib import Path
from typing import Optional

from ... import config

from .base import AssetStore, AssetStoreConfig
from .inline import InlineAssetStore
from .local import LocalAssetStore


# Singleton instance
_asset_store: Optional[AssetStore] = None


def asset_store_config_from_env() -> AssetStoreConfig:
    """Read asset store settings from environment variables.

    Environment variables:
    - STORAGE_BACKEND: 'local' (default), 's3', 'minio', 'inline'
    - STORAGE_BASE_PATH: Root directory for local storage (default: data dir)

    For S3 / MinIO:
    - S3_BUCKET (required), S3_ENDPOINT, S3_ACCESS_KEY, S3_SECRET_KEY
    - S3_REGION (default: us-east-1), S3_USE_SSL (default: true)
    - S3_PUBLIC_URL: Public base URL for objects
    - S3_URL_EXPIRY: Private bucket, presigned URL lifetime in seconds (default: public objects)
    """
    backend = os.environ.get("STORAGE_BACKEND", "local").lower()

    if backend == "local":
        base_path = os.environ.get("STORAGE_BASE_PATH")
        return AssetStoreConfig(
            backend="local",
            folder=config.UPLOADS_FOLDER,
            base_path=Path(base_path) if base_path else Path(config.DATA_DIR),
        )

    if backend in ("s3", "minio"):
        bucket = os.environ.get("S3_BUCKET")
        if not bucket:
            raise ValueError("S3_BUCKET environment variable is required for S3 storage")
        expiry = os.environ.get("S3_URL_EXPIRY")
        return AssetStoreConfig(
            backend=backend,
            folder=config.UPLOADS_FOLDER,
            bucket_name=bucket,
            endpoint_url=os.environ.get("S3_ENDPOINT"),
            access_key=os.environ.get("S3_ACCESS_KEY"),
            secret_key=os.environ.get("S3_SECRET_KEY"),
            region=os.environ.get("S3_REGION", "us-east-1"),
            use_ssl=os.environ.get("S3_USE_SSL", "true").lower() == "true",
            public_url=os.environ.get("S3_PUBLIC_URL"),
            url_expiry=int(expiry) if expiry else None,
        )

    if backend == "inline":
        return AssetStoreConfig(backend="inline", folder=config.UPLOADS_FOLDER)

    raise ValueError(f"Unknown storage backend: {backend}")


def create_asset_store(store_config: AssetStoreConfig) -> AssetStore:
    if store_config.backend == "local":
        return LocalAssetStore(store_config)
    if store_config.backend in ("s3", "minio"):
        # boto3 is only imported when S3 is configured
        from .s3 import S3AssetStore
        return S3AssetStore(store_config)
    if store_config.backend == "inline":
        return InlineAssetStore(store_config)
    raise ValueError(f"Unknown storage backend: {store_config.backend}")


def get_asset_store() -> AssetStore:
    """Get or create the process-wide asset store."""
    global _asset_store

    if _asset_store is None:
        _asset_store = create_asset_store(asset_store_config_from_env())

    return _asset_store


def reset_asset_store():
    """Forget the cached asset store (useful for testing)."""
    global _asset_store
    _asset_store = None
