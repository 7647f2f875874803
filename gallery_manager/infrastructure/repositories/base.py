"""Base repository protocol and utilities.

This module defines the interface that all gallery record stores implement.
"""
import uuid
from datetime import datetime, timezone
from typing import Protocol, Optional

import aiosqlite


# Columns a caller may set; id and timestamps are owned by the store
WRITABLE_FIELDS = ("title", "category", "description", "image_url", "user_id")


class GalleryStore(Protocol):
    """Protocol for gallery record stores.

    Records are plain dicts with keys: id, title, category, description,
    image_url, created_at, updated_at, user_id.
    """

    async def list_all(self, category: Optional[str] = None) -> list[dict]: ...
    async def get_by_id(self, item_id: str) -> dict | None: ...
    async def create(self, fields: dict) -> dict: ...
    async def create_many(self, fields_list: list[dict]) -> list[dict]: ...
    async def update(self, item_id: str, fields: dict) -> dict | None: ...
    async def delete(self, item_id: str) -> bool: ...
    async def close(self) -> None: ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_record(fields: dict, now: Optional[datetime] = None) -> dict:
    """Build a full record from caller fields, assigning id and timestamps."""
    now = now or utcnow()
    return {
        "id": str(uuid.uuid4()),
        "title": fields["title"],
        "category": fields["category"],
        "description": fields.get("description") or "",
        "image_url": fields["image_url"],
        "created_at": now,
        "updated_at": now,
        "user_id": fields.get("user_id"),
    }


def writable(fields: dict) -> dict:
    """Drop keys the caller is not allowed to write."""
    return {k: v for k, v in fields.items() if k in WRITABLE_FIELDS}


class AsyncConnectionProtocol(Protocol):
    """Protocol for async database connection."""

    async def execute(self, sql: str, parameters: tuple = ...) -> aiosqlite.Cursor: ...
    async def commit(self) -> None: ...


class AsyncRepository:
    """Async base repository class.

    Provides async database operations using aiosqlite.

    Example:
        class AsyncThingRepository(AsyncRepository):
            async def get_by_id(self, thing_id: str) -> dict | None:
                return await self._fetchone("SELECT * FROM things WHERE id = ?", (thing_id,))
    """

    def __init__(self, connection: AsyncConnectionProtocol):
        """Initialize repository with async database connection.

        Args:
            connection: Async database connection (aiosqlite.Connection)
        """
        self._conn = connection

    async def _execute(self, sql: str, parameters: tuple = ()) -> aiosqlite.Cursor:
        """Execute SQL query with parameters asynchronously."""
        return await self._conn.execute(sql, parameters)

    async def _execute_many(self, sql: str, parameters_list: list[tuple]) -> aiosqlite.Cursor:
        """Execute SQL query multiple times asynchronously."""
        return await self._conn.executemany(sql, parameters_list)

    async def _commit(self) -> None:
        """Commit current transaction asynchronously."""
        await self._conn.commit()

    async def _rollback(self) -> None:
        await self._conn.rollback()

    def _row_to_dict(self, row: aiosqlite.Row | None) -> dict | None:
        """Convert aiosqlite.Row to dictionary."""
        return dict(row) if row else None

    async def _fetchone(self, sql: str, parameters: tuple = ()) -> dict | None:
        """Fetch single row and return as dict."""
        cursor = await self._execute(sql, parameters)
        row = await cursor.fetchone()
        return self._row_to_dict(row)

    async def _fetchall(self, sql: str, parameters: tuple = ()) -> list[dict]:
        """Fetch all rows and return as list of dicts."""
        cursor = await self._execute(sql, parameters)
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]
