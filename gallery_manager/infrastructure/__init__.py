# Infrastructure layer - database, storage, external services
"""
Infrastructure layer contains:
- Record stores (SQLite, JSON file)
- Asset storage adapters (local, S3, inline)
- GalleryBackend pairing one of each

This layer depends on the domain layer, not vice versa.
"""
from .backend import GalleryBackend, create_backend

__all__ = ["GalleryBackend", "create_backend"]
