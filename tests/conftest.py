"""Test configuration and fixtures for the gallery manager.

This module provides isolated test environments:
- Temporary SQLite database or JSON file per test
- Temporary local asset directory
- Real image bytes generated with Pillow
"""
import sys
from io import BytesIO
from pathlib import Path
from typing import Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from PIL import Image

# Ensure gallery_manager is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from gallery_manager.application.services import GalleryService
from gallery_manager.domain import CandidateFile
from gallery_manager.infrastructure import GalleryBackend
from gallery_manager.infrastructure.database import open_database
from gallery_manager.infrastructure.repositories import GalleryRepository, JsonGalleryRepository
from gallery_manager.infrastructure.storage import AssetStoreConfig, LocalAssetStore, reset_asset_store


def make_image(fmt: str = "PNG", size=(2, 2), color=(255, 0, 0)) -> bytes:
    """Generate a tiny image in memory."""
    img = Image.new("RGB", size, color=color)
    buf = BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def make_candidate(filename: str = "photo.jpg", content_type: str = "image/jpeg", **kwargs) -> CandidateFile:
    fmt = {"image/png": "PNG", "image/gif": "GIF"}.get(content_type, "JPEG")
    content = kwargs.pop("content", None) or make_image(fmt)
    return CandidateFile(filename=filename, content_type=content_type, content=content, **kwargs)


@pytest.fixture
def local_assets(tmp_path: Path) -> LocalAssetStore:
    """Local asset store rooted in a temporary directory."""
    return LocalAssetStore(AssetStoreConfig(backend="local", base_path=tmp_path / "assets"))


@pytest_asyncio.fixture(params=["sqlite", "json"])
async def record_store(request, tmp_path: Path):
    """Each record store the backend can be configured with."""
    if request.param == "sqlite":
        store = GalleryRepository(await open_database(tmp_path / "gallery.db"))
    else:
        store = JsonGalleryRepository(tmp_path / "gallery.json")
    yield store
    await store.close()


@pytest.fixture
def backend(record_store, local_assets) -> GalleryBackend:
    return GalleryBackend(record_store, local_assets)


@pytest.fixture
def gallery_service(backend) -> GalleryService:
    return GalleryService(backend)


@pytest.fixture(scope="function")
def patched_config(tmp_path: Path, monkeypatch):
    """Point configuration and storage selection at temporary paths."""
    from gallery_manager import config

    monkeypatch.setattr(config, "DATA_DIR", tmp_path)
    monkeypatch.setattr(config, "RECORD_STORE", "sqlite")
    monkeypatch.setattr(config, "DATABASE_PATH", tmp_path / "gallery.db")
    monkeypatch.setattr(config, "GALLERY_JSON_PATH", tmp_path / "gallery.json")
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.setenv("STORAGE_BASE_PATH", str(tmp_path))
    reset_asset_store()

    yield tmp_path

    reset_asset_store()


@pytest.fixture(scope="function")
def client(patched_config: Path) -> Generator[TestClient, None, None]:
    """Create test client backed by a fresh SQLite file and local assets.

    Usage:
        def test_something(client):
            response = client.get("/api/gallery")
            assert response.status_code == 200
    """
    from gallery_manager.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def image_factory():
    """Build image bytes: image_factory("JPEG", size=(4, 4))."""
    return make_image


@pytest.fixture
def candidate_factory():
    """Build a CandidateFile: candidate_factory("a.png", "image/png")."""
    return make_candidate
