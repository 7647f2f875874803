"""Gallery routes package.

This module aggregates all gallery-related routes:
- items: listing, categories, update and delete
- uploads: single and batch upload endpoints
- files: serving locally stored images
"""
from fastapi import APIRouter

from . import items, uploads, files

# Create main router with all routes
router = APIRouter()

router.include_router(items.router)
router.include_router(uploads.router)
router.include_router(files.router)

__all__ = ["router"]
