"""SQLite-based website record store."""

import asyncio
from datetime import datetime
from pathlib import Path

import aiosqlite

from sitelens.exceptions import StorageError
from sitelens.logging import get_logger
from sitelens.models.website import WebsiteRecord, WebsiteRecordCreate, WebsiteRecordUpdate
from sitelens.storage.base import WebsiteStore

COLUMNS = (
    "id, url, brand_name, description, raw_description, enhanced, created_at, updated_at"
)


class SQLiteWebsiteStore(WebsiteStore):
    """SQLite-based store using aiosqlite."""

    def __init__(self, db_path: str = "sitelens.db"):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self._db: aiosqlite.Connection | None = None
        self._open_lock = asyncio.Lock()
        self._log = get_logger("store")

    async def _ensure_db(self) -> aiosqlite.Connection:
        """Ensure database connection and schema exist."""
        if self._db is not None:
            return self._db

        async with self._open_lock:
            if self._db is None:
                self._db = await self._open()
        return self._db

    async def _open(self) -> aiosqlite.Connection:
        try:
            db = await aiosqlite.connect(self.db_path)
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to open database {self.db_path}: {e}") from e

        try:
            db.row_factory = aiosqlite.Row
            await db.execute("""
                CREATE TABLE IF NOT EXISTS website_analysis (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    url VARCHAR(500) NOT NULL,
                    brand_name VARCHAR(255),
                    description TEXT,
                    raw_description TEXT,
                    enhanced INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            await db.execute(
                "CREATE INDEX IF NOT EXISTS idx_created ON website_analysis(created_at)"
            )
            await db.commit()
        except aiosqlite.Error as e:
            await db.close()
            raise StorageError(f"Failed to open database {self.db_path}: {e}") from e
        return db

    async def create(self, record: WebsiteRecordCreate) -> WebsiteRecord:
        """Insert a record and return it with id and timestamps."""
        db = await self._ensure_db()
        now = datetime.now().isoformat()

        try:
            cursor = await db.execute(
                """
                INSERT INTO website_analysis
                    (url, brand_name, description, raw_description, enhanced, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.url,
                    record.brand_name,
                    record.description,
                    record.raw_description,
                    int(record.enhanced),
                    now,
                    now,
                ),
            )
            await db.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to store analysis for {record.url}: {e}") from e

        self._log.info("record_created", record_id=cursor.lastrowid, url=record.url)
        return await self.get(cursor.lastrowid)

    async def list_all(self) -> list[WebsiteRecord]:
        """Return all records, newest first."""
        db = await self._ensure_db()
        try:
            async with db.execute(
                f"SELECT {COLUMNS} FROM website_analysis ORDER BY created_at DESC, id DESC"
            ) as cursor:
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to list records: {e}") from e
        return [_to_record(row) for row in rows]

    async def get(self, record_id: int) -> WebsiteRecord | None:
        """Fetch a record by id."""
        db = await self._ensure_db()
        try:
            async with db.execute(
                f"SELECT {COLUMNS} FROM website_analysis WHERE id = ?",
                (record_id,),
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to read record {record_id}: {e}") from e
        return _to_record(row) if row is not None else None

    async def update(self, record_id: int, changes: WebsiteRecordUpdate) -> WebsiteRecord | None:
        """Overwrite the provided fields and bump updated_at."""
        fields = changes.changes()
        db = await self._ensure_db()

        assignments = [f"{name} = ?" for name in fields]
        assignments.append("updated_at = ?")
        params = [*fields.values(), datetime.now().isoformat(), record_id]

        try:
            cursor = await db.execute(
                f"UPDATE website_analysis SET {', '.join(assignments)} WHERE id = ?",
                params,
            )
            await db.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to update record {record_id}: {e}") from e

        if cursor.rowcount == 0:
            return None
        self._log.info("record_updated", record_id=record_id, fields=list(fields))
        return await self.get(record_id)

    async def delete(self, record_id: int) -> WebsiteRecord | None:
        """Remove a record, returning what was deleted."""
        existing = await self.get(record_id)
        if existing is None:
            return None

        db = await self._ensure_db()
        try:
            await db.execute("DELETE FROM website_analysis WHERE id = ?", (record_id,))
            await db.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to delete record {record_id}: {e}") from e

        self._log.info("record_deleted", record_id=record_id)
        return existing

    async def close(self) -> None:
        """Close database connection."""
        if self._db is not None:
            await self._db.close()
            self._db = None


def _to_record(row: aiosqlite.Row) -> WebsiteRecord:
    return WebsiteRecord(
        id=row["id"],
        url=row["url"],
        brand_name=row["brand_name"],
        description=row["description"],
        raw_description=row["raw_description"],
        enhanced=bool(row["enhanced"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )
