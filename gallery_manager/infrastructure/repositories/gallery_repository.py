"""Gallery repository - SQLite record store for gallery images."""
from typing import Optional

from .base import AsyncRepository, new_record, utcnow, writable


_COLUMNS = ("id", "title", "category", "description", "image_url",
            "created_at", "updated_at", "user_id")

_INSERT_SQL = (
    f"INSERT INTO gallery_images ({', '.join(_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in _COLUMNS)})"
)


def _params(record: dict) -> tuple:
    return tuple(record[col] for col in _COLUMNS)


class GalleryRepository(AsyncRepository):
    """Repository for the gallery_images table."""

    async def list_all(self, category: Optional[str] = None) -> list[dict]:
        """Get items, newest first.

        Args:
            category: Exact category to match, or None for every item
        """
        if category is None:
            return await self._fetchall(
                "SELECT * FROM gallery_images ORDER BY created_at DESC"
            )
        return await self._fetchall(
            "SELECT * FROM gallery_images WHERE category = ? ORDER BY created_at DESC",
            (category,)
        )

    async def get_by_id(self, item_id: str) -> dict | None:
        return await self._fetchone(
            "SELECT * FROM gallery_images WHERE id = ?", (item_id,)
        )

    async def create(self, fields: dict) -> dict:
        """Insert one item and return the stored record."""
        record = new_record(fields)
        await self._execute(_INSERT_SQL, _params(record))
        await self._commit()
        return record

    async def create_many(self, fields_list: list[dict]) -> list[dict]:
        """Insert several items in one transaction."""
        now = utcnow()
        records = [new_record(fields, now) for fields in fields_list]
        try:
            await self._execute_many(_INSERT_SQL, [_params(r) for r in records])
            await self._commit()
        except Exception:
            await self._rollback()
            raise
        return records

    async def update(self, item_id: str, fields: dict) -> dict | None:
        """Update writable fields and refresh updated_at.

        Returns:
            Updated record, or None if the item does not exist
        """
        changes = writable(fields)
        changes["updated_at"] = utcnow()

        assignments = ", ".join(f"{col} = ?" for col in changes)
        cursor = await self._execute(
            f"UPDATE gallery_images SET {assignments} WHERE id = ?",
            (*changes.values(), item_id)
        )
        await self._commit()
        if cursor.rowcount == 0:
            return None
        return await self.get_by_id(item_id)

    async def delete(self, item_id: str) -> bool:
        cursor = await self._execute(
            "DELETE FROM gallery_images WHERE id = ?", (item_id,)
        )
        await self._commit()
        return cursor.rowcount > 0

    async def close(self) -> None:
        await self._conn.close()
