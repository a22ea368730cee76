from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from ..db import connect, init_db


class FavoriteStore(Protocol):
    async def exists(self, user_id: str, bar_id: str) -> bool:
        ...

    async def add(self, user_id: str, bar_id: str) -> None:
        ...

    async def remove(self, user_id: str, bar_id: str) -> bool:
        """Delete the membership. Return True if one existed."""
        ...


class SQLiteFavoriteStore:
    def __init__(self, db_path: Path):
        self.db_path = init_db(db_path)

    async def exists(self, user_id: str, bar_id: str) -> bool:
        return await asyncio.to_thread(self._exists, user_id, bar_id)

    async def add(self, user_id: str, bar_id: str) -> None:
        await asyncio.to_thread(self._add, user_id, bar_id)

    async def remove(self, user_id: str, bar_id: str) -> bool:
        return await asyncio.to_thread(self._remove, user_id, bar_id)

    def _exists(self, user_id: str, bar_id: str) -> bool:
        conn = connect(self.db_path)
        try:
            row = conn.execute(
                "SELECT 1 FROM favorites WHERE user_id = ? AND bar_id = ?",
                (user_id, bar_id),
            ).fetchone()
        finally:
            conn.close()
        return row is not None

    def _add(self, user_id: str, bar_id: str) -> None:
        conn = connect(self.db_path)
        try:
            with conn:
                conn.execute(
                    "INSERT OR IGNORE INTO favorites (user_id, bar_id, created_ts) "
                    "VALUES (?, ?, ?)",
                    (user_id, bar_id, datetime.now(UTC).isoformat()),
                )
        finally:
            conn.close()

    def _remove(self, user_id: str, bar_id: str) -> bool:
        conn = connect(self.db_path)
        try:
            with conn:
                cursor = conn.execute(
                    "DELETE FROM favorites WHERE user_id = ? AND bar_id = ?",
                    (user_id, bar_id),
                )
        finally:
            conn.close()
        return cursor.rowcount > 0
