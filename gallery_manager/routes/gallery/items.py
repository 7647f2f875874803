"""Item routes - listing, categories and edits."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ...application.services import GalleryService
from ...dependencies import get_gallery_service
from ...domain import ALL_CATEGORIES, Category, GalleryItem

router = APIRouter(prefix="/api/gallery")


class ItemUpdate(BaseModel):
    """Partial update body. Omitted fields are left unchanged."""
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    user_id: Optional[str] = None


@router.get("", response_model=list[GalleryItem])
async def list_items(
    category: Optional[str] = None,
    service: GalleryService = Depends(get_gallery_service)
):
    """List items newest first, optionally for one category."""
    return await service.list_items(category)


@router.get("/categories")
async def list_categories():
    """Concrete categories, preceded by the "All Categories" filter value."""
    return {
        "categories": [c.value for c in Category],
        "all": ALL_CATEGORIES,
    }


@router.get("/categories/counts")
async def category_counts(service: GalleryService = Depends(get_gallery_service)):
    counts = await service.count_by_category()
    return {category.value: count for category, count in counts.items()}


@router.get("/{item_id}", response_model=GalleryItem)
async def get_item(item_id: str, service: GalleryService = Depends(get_gallery_service)):
    item = await service.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.put("/{item_id}", response_model=GalleryItem)
async def update_item(
    item_id: str,
    data: ItemUpdate,
    service: GalleryService = Depends(get_gallery_service)
):
    """Update the fields present in the request body."""
    return await service.update_item(item_id, **data.model_dump(exclude_unset=True))


@router.delete("/{item_id}")
async def delete_item(item_id: str, service: GalleryService = Depends(get_gallery_service)):
    await service.delete_item(item_id)
    return {"message": "Item deleted successfully"}
