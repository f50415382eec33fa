"""
In-memory backend.

A dict-backed store with no on-disk state. Values are deep-copied on write and
read so callers never alias stored documents. Useful as a baseline for the
harness overhead itself.
"""

import copy
from typing import Dict, Optional

from kvbench.core.backends.base import Backend
from kvbench.core.errors import KeyNotFoundError
from kvbench.models.records import Document


class MemoryBackend(Backend):
    kind = "memory"
    display_name = "Memory"

    def __init__(self, data_dir=None, seed_count: int = 200):
        # No directory: the store lives and dies with the handle.
        super().__init__(None, seed_count)
        self._data: Optional[Dict[str, Document]] = None

    def _open_store(self) -> None:
        self._data = {}

    def _close_store(self) -> None:
        self._data = None

    def _put(self, key: str, value: Document) -> None:
        self._data[key] = copy.deepcopy(value)

    def _get(self, key: str) -> Document:
        try:
            return copy.deepcopy(self._data[key])
        except KeyError:
            raise KeyNotFoundError(key) from None
