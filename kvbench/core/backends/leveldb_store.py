"""
LevelDB Backend

Log-structured on-disk store through plyvel. Keys are UTF-8 bytes and values
are JSON documents encoded to UTF-8 (see kvbench.core.codec).

plyvel is an optional dependency (``pip install kvbench[leveldb]``). When it
is not installed the backend can still be constructed and listed, but
start() fails with BackendError.
"""

import logging
from typing import Optional

try:
    import plyvel
except ImportError:  # optional extra
    plyvel = None

from kvbench.core import codec
from kvbench.core.backends.base import Backend
from kvbench.core.errors import BackendError, KeyNotFoundError
from kvbench.models.records import Document

logger = logging.getLogger(__name__)

DB_NAME = "leveldb_db"


def leveldb_available() -> bool:
    return plyvel is not None


class LevelDBBackend(Backend):
    kind = "leveldb"
    display_name = "LevelDB"
    engine_errors = (OSError, ValueError, TypeError) + (
        (plyvel.Error,) if plyvel is not None else ()
    )

    def __init__(self, data_dir="./kvbench_data", seed_count: int = 200):
        super().__init__(data_dir, seed_count)
        self._db = None

    def _open_store(self) -> None:
        if plyvel is None:
            raise BackendError(
                "LevelDB backend requested but plyvel is not installed "
                "(pip install kvbench[leveldb])"
            )
        path = self.db_dir / DB_NAME
        self._db = plyvel.DB(str(path), create_if_missing=True, error_if_exists=True)
        logger.debug(f"Opened LevelDB store at {path}")

    def _close_store(self) -> None:
        if self._db is not None:
            try:
                self._db.close()
            finally:
                self._db = None

    def _put(self, key: str, value: Document) -> None:
        self._db.put(key.encode("utf-8"), codec.dumps(value).encode("utf-8"))

    def _get(self, key: str) -> Document:
        raw: Optional[bytes] = self._db.get(key.encode("utf-8"))
        if raw is None:
            raise KeyNotFoundError(key)
        return codec.loads(raw)
