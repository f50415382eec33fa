"""
SQLite Backend

Single-table key/value store on top of the stdlib sqlite3 module.

- Table schema: kv(key TEXT PRIMARY KEY, value TEXT NOT NULL)
- Values are JSON encoded (see kvbench.core.codec)
- Each insert is its own committed transaction (UPSERT)

The connection is opened with ``check_same_thread=False``; all calls are made
from the backend's single worker thread.
"""

import logging
import sqlite3
from typing import Optional

from kvbench.core import codec
from kvbench.core.backends.base import Backend
from kvbench.core.errors import KeyNotFoundError
from kvbench.models.records import Document

logger = logging.getLogger(__name__)

DB_FILENAME = "kv.sqlite3"

PRAGMAS = {
    "journal_mode": "WAL",
    "synchronous": "NORMAL",
}


class SQLiteBackend(Backend):
    kind = "sqlite"
    display_name = "SQLite"
    engine_errors = (OSError, sqlite3.Error, ValueError, TypeError)

    def __init__(self, data_dir="./kvbench_data", seed_count: int = 200):
        super().__init__(data_dir, seed_count)
        self._conn: Optional[sqlite3.Connection] = None

    def _open_store(self) -> None:
        path = self.db_dir / DB_FILENAME
        conn = sqlite3.connect(str(path), check_same_thread=False)
        cur = conn.cursor()
        cur.execute("PRAGMA journal_mode=%s" % PRAGMAS["journal_mode"])
        cur.execute("PRAGMA synchronous=%s" % PRAGMAS["synchronous"])
        cur.close()
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )
        conn.commit()
        self._conn = conn
        logger.debug(f"Opened SQLite store at {path}")

    def _close_store(self) -> None:
        if self._conn is not None:
            try:
                self._conn.close()
            finally:
                self._conn = None

    def _put(self, key: str, value: Document) -> None:
        encoded = codec.dumps(value)
        with self._conn:
            self._conn.execute(
                "INSERT INTO kv(key, value) VALUES(?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, encoded),
            )

    def _get(self, key: str) -> Document:
        row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        if row is None:
            raise KeyNotFoundError(key)
        return codec.loads(row[0])
