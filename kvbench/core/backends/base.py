"""
Base Backend

Abstract interface every storage engine is driven through.
"""

import asyncio
import logging
import shutil
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Optional, Tuple, Type

from kvbench.core.errors import BackendError
from kvbench.models.records import Document

logger = logging.getLogger(__name__)

DEFAULT_SEED_COUNT = 200


class Backend(ABC):
    """
    Abstract base class for key-value storage backends.

    Each engine (LevelDB, TinyDB, SQLite, in-memory) implements the four
    synchronous hooks below. The public async API runs them one at a time on a
    single worker thread owned by this backend and translates the engine's
    exception types (``engine_errors``) into BackendError.

    Lifecycle:
        start() closes any open store, wipes the backend's directory, opens a
        fresh store and seeds ``seed_count`` startup records. It may be called
        any number of times; each call discards all prior contents.
    """

    kind: str = "backend"
    display_name: str = "Backend"
    engine_errors: Tuple[Type[BaseException], ...] = (OSError,)

    def __init__(
        self,
        data_dir: Optional[Path | str] = None,
        seed_count: int = DEFAULT_SEED_COUNT,
    ):
        """
        Initialize backend.

        Args:
            data_dir: Parent directory; the backend owns ``<data_dir>/<kind>_db``
            seed_count: Startup records written by every start()
        """
        if seed_count < 0:
            raise ValueError(f"seed_count must be >= 0, got {seed_count}")
        self.data_dir = Path(data_dir) if data_dir is not None else None
        self.seed_count = seed_count
        self._is_open = False
        self._executor: Optional[ThreadPoolExecutor] = None

    # ------------------------------------------------------------------
    # Engine hooks (run on the backend's worker thread)
    # ------------------------------------------------------------------

    @abstractmethod
    def _open_store(self) -> None:
        """Open a fresh, empty store inside db_dir."""
        pass

    @abstractmethod
    def _close_store(self) -> None:
        """Release the store handle."""
        pass

    @abstractmethod
    def _put(self, key: str, value: Document) -> None:
        pass

    @abstractmethod
    def _get(self, key: str) -> Document:
        """
        Read the latest value for ``key``.

        Raises:
            KeyNotFoundError: if the key was never written
        """
        pass

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.display_name

    @property
    def db_dir(self) -> Optional[Path]:
        """Directory owned by this backend, or None for directory-less stores."""
        if self.data_dir is None:
            return None
        return self.data_dir / f"{self.kind}_db"

    @property
    def is_open(self) -> bool:
        return self._is_open

    async def start(self) -> None:
        """
        Reset the backend to exactly its seeded startup records.

        Raises:
            BackendError: if the store cannot be closed, wiped, reopened or seeded
        """
        logger.info(f"Starting backend {self.name} (dir={self.db_dir})")

        await self._release()
        await self._call("reset", self._reset_directory)
        await self._call("open", self._open_store)
        self._is_open = True

        for i in range(self.seed_count):
            await self.insert(f"startup_data{i}", f"startup_value{i}")

        logger.debug(f"{self.name} ready with {self.seed_count} seed records")

    async def insert(self, key: str, value: Document) -> None:
        """Write or overwrite ``key``."""
        self._ensure_open()
        await self._call("insert", self._put, key, value)

    async def lookup(self, key: str) -> Document:
        """
        Return the most recently written value for ``key``.

        Raises:
            KeyNotFoundError: if the key is absent
            BackendError: on any other read failure
        """
        self._ensure_open()
        return await self._call("lookup", self._get, key)

    async def close(self) -> None:
        """Release the store and the worker thread. Safe to call repeatedly."""
        try:
            await self._release()
        finally:
            if self._executor is not None:
                self._executor.shutdown(wait=True)
                self._executor = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _reset_directory(self) -> None:
        db_dir = self.db_dir
        if db_dir is None:
            return
        try:
            if db_dir.is_symlink() or db_dir.is_file():
                db_dir.unlink()
            else:
                shutil.rmtree(db_dir)
        except FileNotFoundError:
            pass
        db_dir.mkdir(parents=True)

    async def _release(self) -> None:
        if not self._is_open:
            return
        try:
            await self._call("close", self._close_store)
        finally:
            self._is_open = False

    def _ensure_open(self) -> None:
        if not self._is_open:
            raise BackendError(f"{self.name} is not started")

    def _run_in_executor(self, func: Callable[..., Any], *args: Any):
        """Run a blocking engine call on this backend's worker thread."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix=f"kvbench-{self.kind}"
            )
        loop = asyncio.get_running_loop()
        return loop.run_in_executor(self._executor, func, *args)

    async def _call(self, operation: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return await self._run_in_executor(func, *args)
        except BackendError:
            raise
        except self.engine_errors as e:
            raise BackendError(f"{self.name} {operation} failed: {e}") from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, dir={self.db_dir})"
