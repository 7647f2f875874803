"""Flat-file JSON record store.

The whole gallery lives in one JSON array on disk. Every mutation is a
read-modify-write of that file, serialized by an asyncio lock and
written through a temp file so readers never see a half-written array.
"""
import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from .base import new_record, utcnow, writable


def _encode(record: dict) -> dict:
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in record.items()
    }


def _decode(raw: dict) -> dict:
    record = dict(raw)
    for key in ("created_at", "updated_at"):
        if isinstance(record.get(key), str):
            record[key] = datetime.fromisoformat(record[key])
    record.setdefault("description", "")
    record.setdefault("user_id", None)
    return record


class JsonGalleryRepository:
    """Gallery records stored in a single JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def _read(self) -> list[dict]:
        if not self.path.exists():
            return []
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            text = await f.read()
        if not text.strip():
            return []
        return [_decode(raw) for raw in json.loads(text)]

    async def _write(self, records: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps([_encode(r) for r in records], indent=2))
        await aiofiles.os.replace(tmp_path, self.path)

    async def list_all(self, category: Optional[str] = None) -> list[dict]:
        """Get items, newest first."""
        records = await self._read()
        if category is not None:
            records = [r for r in records if r["category"] == category]
        return sorted(records, key=lambda r: r["created_at"], reverse=True)

    async def get_by_id(self, item_id: str) -> dict | None:
        for record in await self._read():
            if record["id"] == item_id:
                return record
        return None

    async def create(self, fields: dict) -> dict:
        return (await self.create_many([fields]))[0]

    async def create_many(self, fields_list: list[dict]) -> list[dict]:
        """Append several items with a single file write."""
        now = utcnow()
        created = [new_record(fields, now) for fields in fields_list]
        async with self._lock:
            records = await self._read()
            records.extend(created)
            await self._write(records)
        return created

    async def update(self, item_id: str, fields: dict) -> dict | None:
        async with self._lock:
            records = await self._read()
            for record in records:
                if record["id"] == item_id:
                    record.update(writable(fields))
                    record["updated_at"] = utcnow()
                    await self._write(records)
                    return record
        return None

    async def delete(self, item_id: str) -> bool:
        async with self._lock:
            records = await self._read()
            remaining = [r for r in records if r["id"] != item_id]
            if len(remaining) == len(records):
                return False
            await self._write(remaining)
        return True

    async def close(self) -> None:
        pass
