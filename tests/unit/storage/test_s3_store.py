"""Unit tests for S3AssetStore against moto."""
import boto3
import pytest
from botocore.exceptions import EndpointConnectionError
from moto import mock_aws

from gallery_manager.infrastructure.storage import AssetNotFound, AssetStoreConfig, StorageError
from gallery_manager.infrastructure.storage.s3 import S3AssetStore


@pytest.fixture
def aws_mock(monkeypatch):
    """Start moto S3 with dummy credentials."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    with mock_aws():
        yield boto3.client("s3", region_name="us-east-1")


def _config(**kwargs):
    return AssetStoreConfig(backend="s3", bucket_name="gallery-test", **kwargs)


@pytest.fixture
def s3_store(aws_mock):
    return S3AssetStore(_config())


def test_creates_missing_bucket(aws_mock, s3_store):
    buckets = [b["Name"] for b in aws_mock.list_buckets()["Buckets"]]
    assert "gallery-test" in buckets


@pytest.mark.asyncio
async def test_save_remove_flow(aws_mock, s3_store, image_factory):
    content = image_factory("PNG")

    url = await s3_store.save("abc.png", content, "image/png")

    assert url == "https://s3.us-east-1.amazonaws.com/gallery-test/uploads/abc.png"
    obj = aws_mock.get_object(Bucket="gallery-test", Key="uploads/abc.png")
    assert obj["Body"].read() == content
    assert obj["ContentType"] == "image/png"
    assert s3_store.file_id_from_url(url) == "abc.png"

    assert await s3_store.remove("abc.png") is True
    assert s3_store.exists("abc.png") is False
    assert await s3_store.remove("abc.png") is False


@pytest.mark.asyncio
async def test_read(s3_store):
    await s3_store.save("a.gif", b"GIF89a")

    assert await s3_store.read("a.gif") == b"GIF89a"
    with pytest.raises(AssetNotFound):
        await s3_store.read("missing.gif")


def test_public_url_prefix(aws_mock):
    store = S3AssetStore(_config(public_url="https://cdn.example.com/"))

    assert store.url_for("x.jpg") == "https://cdn.example.com/uploads/x.jpg"


@pytest.mark.asyncio
async def test_private_bucket_stores_served_url(aws_mock):
    store = S3AssetStore(_config(url_expiry=60))

    url = await store.save("x.jpg", b"jpeg", "image/jpeg")

    # Stable for the life of the item; presigning happens per request
    assert url == "/uploads/x.jpg"
    assert store.file_id_from_url(url) == "x.jpg"
    assert store.local_path("x.jpg") is None
    assert "Expires" in store.url_for("x.jpg", expires=60)


def test_transport_error_on_exists_is_storage_error(s3_store, monkeypatch):
    def unreachable(**kwargs):
        raise EndpointConnectionError(endpoint_url="http://minio.invalid")
    monkeypatch.setattr(s3_store.client, "head_object", unreachable)

    with pytest.raises(StorageError):
        s3_store.exists("x.jpg")


def test_rejects_missing_bucket_name():
    with pytest.raises(ValueError):
        S3AssetStore(AssetStoreConfig(backend="minio"))
