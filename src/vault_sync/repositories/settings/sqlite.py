"""SQLite key-value store for persisted plugin data."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiosqlite
import structlog

logger = structlog.get_logger(__name__)

CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS plugin_data (
    namespace TEXT PRIMARY KEY,
    data TEXT NOT NULL DEFAULT '{}',
    updated_at TEXT
);
"""


class SQLiteSettingsStore:
    """Namespaced JSON records in a single SQLite table.

    Each namespace holds one JSON object, loaded and saved whole.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Initialize the database and create tables."""
        Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self._db_path)
        self._db.row_factory = aiosqlite.Row
        await self._db.executescript(CREATE_TABLES_SQL)
        await self._db.commit()
        logger.info("SQLite settings store initialized", db_path=self._db_path)

    async def _ensure_connected(self) -> aiosqlite.Connection:
        if self._db is None:
            await self.initialize()
        assert self._db is not None
        return self._db

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    async def load(self, namespace: str) -> dict[str, Any] | None:
        db = await self._ensure_connected()
        cursor = await db.execute(
            "SELECT data FROM plugin_data WHERE namespace = ?", (namespace,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return json.loads(row["data"])

    async def save(self, namespace: str, data: dict[str, Any]) -> None:
        db = await self._ensure_connected()
        await db.execute(
            """INSERT OR REPLACE INTO plugin_data (namespace, data, updated_at)
            VALUES (?, ?, ?)""",
            (namespace, json.dumps(data), datetime.now(timezone.utc).isoformat()),
        )
        await db.commit()

