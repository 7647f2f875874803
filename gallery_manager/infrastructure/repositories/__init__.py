# Repository Pattern Implementation
"""
Repositories abstract record persistence.

Two interchangeable gallery record stores share the GalleryStore protocol:
- GalleryRepository: SQLite table via aiosqlite
- JsonGalleryRepository: a single JSON file on disk
"""
from .base import AsyncRepository, GalleryStore, WRITABLE_FIELDS
from .gallery_repository import GalleryRepository
from .json_repository import JsonGalleryRepository

__all__ = [
    "AsyncRepository",
    "GalleryStore",
    "WRITABLE_FIELDS",
    "GalleryRepository",
    "JsonGalleryRepository",
]
