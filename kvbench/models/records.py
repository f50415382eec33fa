"""
Record Models

A Record pairs a string key with a Document. Documents are either a plain
string or a schemaless mapping whose values may be scalars, bytes, None or
nested mappings.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

Document = Union[str, Dict[str, Any]]


@dataclass(frozen=True)
class Record:
    """A single key/value pair produced by a workload."""

    key: str
    value: Document

    def __repr__(self) -> str:
        return f"Record(key={self.key!r}, value={str(self.value)[:40]}...)"
