"""
Global pytest configuration and fixtures for kvbench tests.

This module provides:
- Real backend fixtures on a per-test temporary directory
- A scripted in-memory backend for injecting storage failures
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncGenerator, Callable, Dict, Iterable, Optional

import pytest
import pytest_asyncio

from kvbench.core.backends import Backend, MemoryBackend, create_backend, leveldb_available
from kvbench.models.records import Document


class ScriptedBackend(MemoryBackend):
    """
    In-memory backend that fails or lies on demand.

    Args:
        fail_start: raise OSError while opening the store
        fail_insert_keys: keys whose insert raises OSError
        fail_lookup_keys: keys whose lookup raises OSError
        overrides: keys whose lookup returns a fixed value instead of the stored one
    """

    def __init__(
        self,
        name: str = "Scripted",
        seed_count: int = 200,
        fail_start: bool = False,
        fail_insert_keys: Iterable[str] = (),
        fail_lookup_keys: Iterable[str] = (),
        overrides: Optional[Dict[str, Document]] = None,
    ):
        super().__init__(seed_count=seed_count)
        self.display_name = name
        self.fail_start = fail_start
        self.fail_insert_keys = set(fail_insert_keys)
        self.fail_lookup_keys = set(fail_lookup_keys)
        self.overrides = overrides or {}
        self.open_calls = 0

    def _open_store(self) -> None:
        self.open_calls += 1
        if self.fail_start:
            raise OSError("disk unavailable")
        super()._open_store()

    def _put(self, key: str, value: Document) -> None:
        if key in self.fail_insert_keys:
            raise OSError(f"write refused for {key}")
        super()._put(key, value)

    def _get(self, key: str) -> Document:
        if key in self.fail_lookup_keys:
            raise OSError(f"read refused for {key}")
        if key in self.overrides:
            return self.overrides[key]
        return super()._get(key)


@pytest.fixture
def scripted_backend() -> Callable[..., ScriptedBackend]:
    """Factory for ScriptedBackend instances."""
    return ScriptedBackend


BACKEND_KINDS = [
    "memory",
    "sqlite",
    "tinydb",
    pytest.param(
        "leveldb",
        marks=pytest.mark.skipif(not leveldb_available(), reason="plyvel not installed"),
    ),
]


@pytest_asyncio.fixture(params=BACKEND_KINDS)
async def backend(request, tmp_path: Path) -> AsyncGenerator[Backend, None]:
    """Every real backend, rooted in a per-test temporary directory."""
    instance = create_backend(request.param, data_dir=tmp_path)
    yield instance
    await instance.close()


@pytest_asyncio.fixture
async def memory_backend() -> AsyncGenerator[Backend, None]:
    instance = MemoryBackend()
    yield instance
    await instance.close()
