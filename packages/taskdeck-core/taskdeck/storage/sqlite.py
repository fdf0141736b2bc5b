"""
SQLite key-value store using aiosqlite.

Each key maps to one row whose value is a JSON array of strings.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import aiosqlite

from taskdeck.errors import DataCorruption, PersistenceFailure
from taskdeck.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT
)
"""


class SQLiteKeyValueStore(KeyValueStore):
    """
    SQLite-backed adapter.

    Automatically creates the database file, parent directories and the
    kv_store table on connect.
    """

    def __init__(self, db_path: str = "~/.taskdeck/taskdeck.db"):
        """
        Initialize SQLite adapter.

        Args:
            db_path: Path to SQLite database file.
                    Supports ~ expansion for home directory.
        """
        self.db_path = Path(db_path).expanduser()
        self._conn: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        """Open the database and create the table if needed."""
        if self._conn is not None:
            return

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = await aiosqlite.connect(str(self.db_path))
            await self._conn.execute("PRAGMA journal_mode = WAL")
            await self._conn.execute(SCHEMA)
            await self._conn.commit()
        except (OSError, aiosqlite.Error) as e:
            raise PersistenceFailure(f"Could not open {self.db_path}: {e}") from e

        logger.info(f"SQLite store connected: {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite store closed")

    async def _get_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            await self.connect()
        return self._conn

    async def get(self, key: str) -> list[str] | None:
        conn = await self._get_conn()
        try:
            cursor = await conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise PersistenceFailure(f"Could not read {key!r}: {e}") from e

        if row is None:
            return None

        try:
            values = json.loads(row[0])
        except ValueError as e:
            raise DataCorruption(f"Stored value for {key!r} is not JSON") from e
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise DataCorruption(f"Stored value for {key!r} is not a list of strings")
        return values

    async def set(self, key: str, values: list[str]) -> bool:
        conn = await self._get_conn()
        now = datetime.now(timezone.utc).isoformat()
        try:
            await conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, json.dumps(list(values), ensure_ascii=False), now),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            raise PersistenceFailure(f"Could not write {key!r}: {e}") from e
        return True
