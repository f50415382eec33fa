"""
Document Store Backend

Embedded JSON document database (TinyDB). Each record is stored as one
document ``{"key": <key>, "value": <encoded value>}`` in the default table and
looked up with a key query, the way an application would use a schemaless
document store rather than a native key-value API.
"""

import logging
from typing import Optional

from tinydb import TinyDB, where

from kvbench.core import codec
from kvbench.core.backends.base import Backend
from kvbench.core.errors import KeyNotFoundError
from kvbench.models.records import Document

logger = logging.getLogger(__name__)

DB_FILENAME = "db.json"


class DocumentStoreBackend(Backend):
    kind = "tinydb"
    display_name = "TinyDB"
    engine_errors = (OSError, ValueError, TypeError)

    def __init__(self, data_dir="./kvbench_data", seed_count: int = 200):
        super().__init__(data_dir, seed_count)
        self._db: Optional[TinyDB] = None

    def _open_store(self) -> None:
        path = self.db_dir / DB_FILENAME
        self._db = TinyDB(str(path), encoding="utf-8")
        logger.debug(f"Opened TinyDB store at {path}")

    def _close_store(self) -> None:
        if self._db is not None:
            try:
                self._db.close()
            finally:
                self._db = None

    def _put(self, key: str, value: Document) -> None:
        self._db.upsert(
            {"key": key, "value": codec.to_jsonable(value)},
            where("key") == key,
        )

    def _get(self, key: str) -> Document:
        doc = self._db.get(where("key") == key)
        if doc is None:
            raise KeyNotFoundError(key)
        return codec.from_jsonable(doc["value"])
