"""Benchmark runner: one timed trial of one workload against one backend."""

import logging
import time

from kvbench.core.backends.base import Backend
from kvbench.core.errors import (
    BackendError,
    MismatchError,
    ReadError,
    SetupError,
    WriteError,
)
from kvbench.core.workload_generators import WorkloadGenerator

logger = logging.getLogger(__name__)

DEFAULT_OPERATION_COUNT = 200


class BenchmarkRunner:
    """
    Runs a single trial with phase separation.

    Phases:
    1. Setup (not timed): backend.start() wipes and seeds the store
    2. Write (timed): insert every workload record in index order
    3. Read (timed): look up every key and verify its discriminating field

    Every operation is awaited before the next one is issued.
    """

    def __init__(self, operation_count: int = DEFAULT_OPERATION_COUNT):
        if operation_count < 1:
            raise ValueError(f"operation_count must be >= 1, got {operation_count}")
        self.operation_count = operation_count

    async def run(self, backend: Backend, workload: WorkloadGenerator) -> float:
        """
        Execute one trial.

        Returns:
            Elapsed milliseconds of the write and read phases

        Raises:
            SetupError: backend could not be reset
            WriteError / ReadError: an operation failed at the given index
            MismatchError: a read returned the wrong value
        """
        try:
            await backend.start()
        except BackendError as e:
            raise SetupError(backend.name, e) from e

        started = time.perf_counter()

        for i in range(self.operation_count):
            record = workload.generate(i)
            try:
                await backend.insert(record.key, record.value)
            except BackendError as e:
                raise WriteError(i, e) from e

        for i in range(self.operation_count):
            try:
                item = await backend.lookup(workload.key_for(i))
            except BackendError as e:
                raise ReadError(i, e) from e
            expected = workload.expected(i)
            try:
                actual = workload.discriminator(item)
            except (KeyError, TypeError, IndexError) as e:
                raise MismatchError(i, expected, item) from e
            if actual != expected:
                raise MismatchError(i, expected, actual)

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.debug(
            f"{workload.name} on {backend.name}: {self.operation_count} writes + "
            f"{self.operation_count} reads in {elapsed_ms:.2f}ms"
        )
        return elapsed_ms
