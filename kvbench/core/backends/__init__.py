"""
Storage backends.

Factory for creating the backend adapter that matches a BackendKind.
"""

from enum import Enum
from pathlib import Path
from typing import List, Sequence

from kvbench.core.backends.base import Backend, DEFAULT_SEED_COUNT
from kvbench.core.backends.document_store import DocumentStoreBackend
from kvbench.core.backends.leveldb_store import LevelDBBackend, leveldb_available
from kvbench.core.backends.memory import MemoryBackend
from kvbench.core.backends.sqlite_store import SQLiteBackend


class BackendKind(str, Enum):
    """Supported storage backends."""

    MEMORY = "memory"
    SQLITE = "sqlite"
    TINYDB = "tinydb"
    LEVELDB = "leveldb"


_BACKENDS = {
    BackendKind.MEMORY: MemoryBackend,
    BackendKind.SQLITE: SQLiteBackend,
    BackendKind.TINYDB: DocumentStoreBackend,
    BackendKind.LEVELDB: LevelDBBackend,
}


def create_backend(
    kind: BackendKind | str,
    data_dir: Path | str = "./kvbench_data",
    seed_count: int = DEFAULT_SEED_COUNT,
) -> Backend:
    """
    Factory function to create a backend adapter.

    Args:
        kind: BackendKind or its string value
        data_dir: Parent directory for the backend's database directory
        seed_count: Startup records written by every start()

    Returns:
        Backend instance (not started)
    """
    try:
        backend_cls = _BACKENDS[BackendKind(kind)]
    except ValueError:
        raise ValueError(f"Unsupported backend: {kind}") from None
    return backend_cls(data_dir, seed_count=seed_count)


def create_backends(
    kinds: Sequence[BackendKind | str],
    data_dir: Path | str = "./kvbench_data",
    seed_count: int = DEFAULT_SEED_COUNT,
) -> List[Backend]:
    """Create one backend per kind, preserving order and rejecting duplicates."""
    seen = set()
    backends = []
    for kind in kinds:
        resolved = BackendKind(kind)
        if resolved in seen:
            raise ValueError(f"Backend listed twice: {resolved.value}")
        seen.add(resolved)
        backends.append(create_backend(resolved, data_dir, seed_count))
    return backends


__all__ = [
    "Backend",
    "BackendKind",
    "DocumentStoreBackend",
    "LevelDBBackend",
    "MemoryBackend",
    "SQLiteBackend",
    "create_backend",
    "create_backends",
    "leveldb_available",
]
