"""
Menu store on SQLite with async support.
"""

import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import aiosqlite

from ..models import AllDataItem, DailyItem


logger = logging.getLogger(__name__)

_SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS daily_items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        date TEXT NOT NULL,
        location TEXT NOT NULL,
        station_name TEXT NOT NULL,
        time_of_day TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE(name, date, location, station_name, time_of_day)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS all_data_items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE,
        first_seen_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS operation_hours (
        location_key TEXT PRIMARY KEY,
        name TEXT,
        payload TEXT NOT NULL,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
]


class Database:
    """Async SQLite wrapper holding the daily menu, item catalog and hours."""

    def __init__(self, db_path: str = "dining.db"):
        # Handle SQLite URL format if provided
        if db_path.startswith("sqlite"):
            # Handle sqlite+aiosqlite:///path format
            if "///" in db_path:
                actual_path = db_path.split("///")[-1]
            else:
                actual_path = db_path.split("//")[-1]
            self.db_path = Path(actual_path)
        else:
            self.db_path = Path(db_path)
        self._connection: Optional[aiosqlite.Connection] = None
        self._in_transaction = False

    async def connect(self) -> None:
        """Connect to the database and create tables."""
        if self._connection:
            return

        self._connection = await aiosqlite.connect(self.db_path, timeout=30)
        self._connection.row_factory = aiosqlite.Row
        await self._connection.execute("PRAGMA journal_mode=WAL;")
        await self._connection.execute("PRAGMA busy_timeout=30000;")
        for statement in _SCHEMA:
            await self._connection.execute(statement)
        await self._connection.commit()

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def _conn(self) -> aiosqlite.Connection:
        if not self._connection:
            await self.connect()
        return self._connection

    @asynccontextmanager
    async def transaction(self):
        """Group writes so they commit together or not at all."""
        conn = await self._conn()
        await conn.execute("BEGIN")
        self._in_transaction = True
        try:
            yield conn
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise
        finally:
            self._in_transaction = False

    async def _commit(self, conn: aiosqlite.Connection) -> None:
        # Writes inside transaction() are committed when the block exits
        if not self._in_transaction:
            await conn.commit()

    async def fetch_all(self, sql: str, params: Tuple[Any, ...] = ()) -> List[aiosqlite.Row]:
        """Fetch all rows."""
        conn = await self._conn()
        cursor = await conn.execute(sql, params)
        return await cursor.fetchall()

    async def _insert_many(self, sql: str, rows: Iterable[Tuple[Any, ...]]) -> int:
        """Run an insert for every row, commit, and return how many rows changed."""
        conn = await self._conn()
        before = conn.total_changes
        await conn.executemany(sql, list(rows))
        await self._commit(conn)
        return conn.total_changes - before

    async def insert_daily_items(self, items: Iterable[DailyItem]) -> int:
        return await self._insert_many(
            """
            INSERT INTO daily_items (name, description, date, location, station_name, time_of_day)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT DO NOTHING
            """,
            (
                (i.name, i.description, i.date, i.location, i.station_name, i.time_of_day)
                for i in items
            ),
        )

    async def insert_all_data_items(self, items: Iterable[AllDataItem]) -> int:
        """Insert catalog names; names already present are skipped."""
        return await self._insert_many(
            "INSERT INTO all_data_items (name) VALUES (?) ON CONFLICT(name) DO NOTHING",
            ((i.name,) for i in items),
        )

    async def date_of_daily_items(self) -> Optional[str]:
        """Date of the stored daily menu, or None when the table is empty."""
        rows = await self.fetch_all("SELECT date FROM daily_items ORDER BY id LIMIT 1")
        return rows[0]["date"] if rows else None

    async def delete_daily_items(self) -> None:
        conn = await self._conn()
        await conn.execute("DELETE FROM daily_items")
        await self._commit(conn)

    async def upsert_operation_hours(self, locations: Iterable[Dict[str, Any]]) -> int:
        """Store one row per location, replacing the previous schedule."""
        rows = []
        for loc in locations:
            key = loc.get("id") or loc.get("name")
            if not key:
                logger.warning("Skipping operation hours entry without id or name")
                continue
            rows.append((key, loc.get("name"), json.dumps(loc, sort_keys=True)))

        return await self._insert_many(
            """
            INSERT INTO operation_hours (location_key, name, payload)
            VALUES (?, ?, ?)
            ON CONFLICT(location_key) DO UPDATE SET
                name = excluded.name,
                payload = excluded.payload,
                updated_at = CURRENT_TIMESTAMP
            """,
            rows,
        )
