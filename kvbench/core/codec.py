"""
JSON encoding of Documents.

Stores that persist JSON cannot hold raw bytes, so bytes fields are wrapped
as ``{"__bytes__": "<base64>"}`` on the way in and unwrapped on the way out.
A user dict that would read back as a tag (a single ``__bytes__`` or
``__escaped__`` key) is wrapped as ``{"__escaped__": {...}}`` so decoding is
lossless.
"""

import base64
import json
from typing import Any

from kvbench.models.records import Document

_BYTES_TAG = "__bytes__"
_ESCAPE_TAG = "__escaped__"
_TAGS = (_BYTES_TAG, _ESCAPE_TAG)


def to_jsonable(value: Any) -> Any:
    """Recursively convert a Document into JSON-compatible primitives."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return {_BYTES_TAG: base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, dict):
        encoded = {str(k): to_jsonable(v) for k, v in value.items()}
        if len(encoded) == 1 and next(iter(encoded)) in _TAGS:
            return {_ESCAPE_TAG: encoded}
        return encoded
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def from_jsonable(value: Any) -> Any:
    """Inverse of to_jsonable."""
    if isinstance(value, dict):
        if len(value) == 1:
            if isinstance(value.get(_ESCAPE_TAG), dict):
                return {k: from_jsonable(v) for k, v in value[_ESCAPE_TAG].items()}
            if isinstance(value.get(_BYTES_TAG), str):
                return base64.b64decode(value[_BYTES_TAG])
        return {k: from_jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_jsonable(v) for v in value]
    return value


def dumps(value: Document) -> str:
    return json.dumps(to_jsonable(value), separators=(",", ":"))


def loads(text: str | bytes) -> Document:
    return from_jsonable(json.loads(text))
