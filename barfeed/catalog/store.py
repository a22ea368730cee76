"""
Catalog store abstraction.

Reads catalog records by place id and creates missing ones. The SQLite
implementation relies on the ``UNIQUE`` constraint on ``bars.place_id`` so
that concurrent creates for the same place collapse into a single row.
"""
from __future__ import annotations

import asyncio
import json
import sqlite3
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

from ..db import connect, init_db
from .models import CatalogRecord

# Stay well under SQLite's bound-parameter limit
_LOOKUP_CHUNK = 500


class CatalogStore(Protocol):
    async def find_by_place_ids(self, place_ids: list[str]) -> list[CatalogRecord]:
        """Return the records whose place id is in ``place_ids`` (any order)."""
        ...

    async def upsert(self, place_id: str, payload: dict[str, Any]) -> CatalogRecord:
        """Atomically find or create the record for ``place_id``.

        When a record already exists, it is returned untouched and
        ``payload`` is discarded.
        """
        ...

    async def get(self, bar_id: str) -> CatalogRecord | None:
        ...


def _row_to_record(row: sqlite3.Row) -> CatalogRecord:
    body = json.loads(row["payload_json"])
    return CatalogRecord.model_validate(
        {**body, "id": row["id"], "place_id": row["place_id"]}
    )


class SQLiteCatalogStore:
    def __init__(self, db_path: Path):
        self.db_path = init_db(db_path)

    async def find_by_place_ids(self, place_ids: list[str]) -> list[CatalogRecord]:
        if not place_ids:
            return []
        return await asyncio.to_thread(self._find_by_place_ids, list(place_ids))

    async def upsert(self, place_id: str, payload: dict[str, Any]) -> CatalogRecord:
        return await asyncio.to_thread(self._upsert, place_id, payload)

    async def get(self, bar_id: str) -> CatalogRecord | None:
        return await asyncio.to_thread(self._get, bar_id)

    def _find_by_place_ids(self, place_ids: list[str]) -> list[CatalogRecord]:
        records: list[CatalogRecord] = []
        conn = connect(self.db_path)
        try:
            for start in range(0, len(place_ids), _LOOKUP_CHUNK):
                chunk = place_ids[start : start + _LOOKUP_CHUNK]
                placeholders = ",".join("?" for _ in chunk)
                rows = conn.execute(
                    f"SELECT id, place_id, payload_json FROM bars "
                    f"WHERE place_id IN ({placeholders})",
                    chunk,
                ).fetchall()
                records.extend(_row_to_record(row) for row in rows)
        finally:
            conn.close()
        return records

    def _upsert(self, place_id: str, payload: dict[str, Any]) -> CatalogRecord:
        # Validate before touching the table so a bad payload never lands.
        candidate = CatalogRecord.model_validate(
            {**payload, "id": uuid.uuid4().hex, "place_id": place_id}
        )
        body = candidate.model_dump(exclude={"id", "place_id"})

        conn = connect(self.db_path)
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO bars (id, place_id, payload_json, created_ts)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(place_id) DO NOTHING
                    """,
                    (
                        candidate.id,
                        place_id,
                        json.dumps(body),
                        datetime.now(UTC).isoformat(),
                    ),
                )
                row = conn.execute(
                    "SELECT id, place_id, payload_json FROM bars WHERE place_id = ?",
                    (place_id,),
                ).fetchone()
        finally:
            conn.close()
        return _row_to_record(row)

    def _get(self, bar_id: str) -> CatalogRecord | None:
        conn = connect(self.db_path)
        try:
            row = conn.execute(
                "SELECT id, place_id, payload_json FROM bars WHERE id = ?",
                (bar_id,),
            ).fetchone()
        finally:
            conn.close()
        return _row_to_record(row) if row else None
