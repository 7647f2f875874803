"""Asset store on S3-compatible object storage (AWS S3, MinIO)."""
import asyncio
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import (
    AssetNotFound,
    AssetStore,
    AssetStoreConfig,
    DeleteError,
    ReadError,
    StorageError,
    UploadError,
)

_MISSING = ("404", "NoSuchKey", "NoSuchBucket")


def _code(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Code", "Unknown")


class S3AssetStore(AssetStore):
    """Objects live at ``<bucket>/<folder>/<file_id>``.

    boto3 blocks, so every network call from a coroutine goes through
    asyncio.to_thread.
    """

    accepts = ("s3", "minio")

    def __init__(self, config: AssetStoreConfig):
        super().__init__(config)
        if not config.bucket_name:
            raise ValueError("S3 asset store needs a bucket name")
        self.bucket = config.bucket_name

        client_kwargs = {
            "aws_access_key_id": config.access_key,
            "aws_secret_access_key": config.secret_key,
            "region_name": config.region,
        }
        # MinIO / custom endpoint
        if config.endpoint_url:
            client_kwargs["endpoint_url"] = config.endpoint_url
            client_kwargs["use_ssl"] = config.use_ssl

        self.client = boto3.client("s3", **client_kwargs)
        self._create_bucket_if_missing()

    def _create_bucket_if_missing(self):
        try:
            self.client.head_bucket(Bucket=self.bucket)
            return
        except ClientError as e:
            if _code(e) not in _MISSING:
                raise StorageError(f"Cannot access bucket {self.bucket}: {e}") from e

        kwargs = {"Bucket": self.bucket}
        if self.config.region != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self.config.region}
        try:
            self.client.create_bucket(**kwargs)
        except ClientError as e:
            raise StorageError(f"Cannot create bucket {self.bucket}: {e}") from e

    def key_for(self, file_id: str) -> str:
        return f"{self.folder}/{self.safe_id(file_id)}"

    async def save(self, file_id: str, content: bytes, content_type: Optional[str] = None) -> str:
        extra = {"ContentType": content_type} if content_type else {}
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket, Key=self.key_for(file_id), Body=content, **extra
            )
        except (ClientError, BotoCoreError) as e:
            raise UploadError(f"Could not upload {file_id}: {e}") from e
        if self.config.url_expiry is not None:
            # Private bucket: /uploads presigns on every request
            return f"/{self.folder}/{self.safe_id(file_id)}"
        return self.url_for(file_id)

    async def read(self, file_id: str) -> bytes:
        def _get() -> bytes:
            obj = self.client.get_object(Bucket=self.bucket, Key=self.key_for(file_id))
            return obj["Body"].read()

        try:
            return await asyncio.to_thread(_get)
        except ClientError as e:
            if _code(e) in _MISSING:
                raise AssetNotFound(file_id) from e
            raise ReadError(f"Could not read {file_id}: {e}") from e
        except BotoCoreError as e:
            raise ReadError(f"Could not read {file_id}: {e}") from e

    async def remove(self, file_id: str) -> bool:
        # S3 deletes succeed for missing keys; look first to report it
        if not await asyncio.to_thread(self.exists, file_id):
            return False
        try:
            await asyncio.to_thread(
                self.client.delete_object, Bucket=self.bucket, Key=self.key_for(file_id)
            )
        except (ClientError, BotoCoreError) as e:
            raise DeleteError(f"Could not delete {file_id}: {e}") from e
        return True

    def exists(self, file_id: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=self.key_for(file_id))
        except ClientError as e:
            if _code(e) in _MISSING:
                return False
            raise StorageError(f"Cannot check {file_id}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Cannot check {file_id}: {e}") from e
        return True

    def url_for(self, file_id: str, expires: Optional[int] = None) -> str:
        """Public URL, or a presigned one when expires is given."""
        key = self.key_for(file_id)
        if expires is not None:
            try:
                return self.client.generate_presigned_url(
                    "get_object", Params={"Bucket": self.bucket, "Key": key}, ExpiresIn=expires
                )
            except ClientError as e:
                raise StorageError(f"Cannot sign URL for {file_id}: {e}") from e

        if self.config.public_url:
            return f"{self.config.public_url.rstrip('/')}/{key}"
        endpoint = self.config.endpoint_url or f"https://s3.{self.config.region}.amazonaws.com"
        return f"{endpoint.rstrip('/')}/{self.bucket}/{key}"
