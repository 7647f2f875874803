"""Async database connection management.

Provides async database connectivity using aiosqlite.
"""
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Union

import aiosqlite


# =============================================================================
# SQLite3 datetime adapter (Python 3.12 compatibility)
# =============================================================================
def _adapt_datetime(dt: datetime) -> str:
    """Adapt datetime to ISO 8601 string for SQLite."""
    return dt.isoformat()


def _convert_datetime(val: bytes) -> datetime:
    """Convert ISO 8601 string from SQLite to datetime."""
    return datetime.fromisoformat(val.decode())


sqlite3.register_adapter(datetime, _adapt_datetime)
sqlite3.register_converter("DATETIME", _convert_datetime)
sqlite3.register_converter("TIMESTAMP", _convert_datetime)


async def open_database(db_path: Union[str, Path]) -> aiosqlite.Connection:
    """Open a connection and make sure the schema exists.

    Args:
        db_path: SQLite file path (':memory:' works for tests)

    Returns:
        Async database connection with dict-like rows
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(
        db_path,
        detect_types=sqlite3.PARSE_DECLTYPES
    )
    conn.row_factory = aiosqlite.Row
    try:
        await init_schema(conn)
    except Exception:
        await conn.close()
        raise
    return conn


async def init_schema(conn: aiosqlite.Connection) -> None:
    """Initialize database schema."""
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS gallery_images (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            category TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            image_url TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL,
            user_id TEXT
        )
    """)

    await conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_gallery_images_category_created
        ON gallery_images(category, created_at)
    """)

    await conn.commit()
