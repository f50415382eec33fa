"""
Error taxonomy for backends and benchmark runs.

BackendError covers storage failures raised by an adapter. RunError and its
subclasses describe why a trial was voided and at which workload index.
"""

from __future__ import annotations

from typing import Any


class BackendError(Exception):
    """Storage open/close/seed/write/read failure."""


class KeyNotFoundError(BackendError):
    """Lookup of a key that was never written."""

    def __init__(self, key: str):
        super().__init__(f"Key not found: {key!r}")
        self.key = key


class RunError(Exception):
    """Base class for a failed trial."""

    kind: str = "run"

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class SetupError(RunError):
    """Backend failed to reset or seed; the trial never started."""

    kind = "setup"

    def __init__(self, backend_name: str, cause: BaseException):
        super().__init__(f"{backend_name} failed to start: {cause}")


class WriteError(RunError):
    kind = "write"

    def __init__(self, index: int, cause: BaseException):
        super().__init__(f"insert failed at index {index}: {cause}", index)


class ReadError(RunError):
    kind = "read"

    def __init__(self, index: int, cause: BaseException):
        super().__init__(f"lookup failed at index {index}: {cause}", index)


class MismatchError(RunError):
    """Backend returned a value whose discriminating field is wrong."""

    kind = "mismatch"

    def __init__(self, index: int, expected: Any, actual: Any):
        super().__init__(
            f"value mismatch at index {index}: expected {expected!r}, got {actual!r}",
            index,
        )
        self.expected = expected
        self.actual = actual
