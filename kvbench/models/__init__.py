"""
Data models for kvbench.

This package contains:
- Records and the Document value type produced by workloads
- Pydantic models for trial and aggregate results
"""

from kvbench.models.records import Document, Record

from kvbench.models.results import (
    AggregateStatus,
    TrialResult,
    TrialFailure,
    AggregateResult,
)

__all__ = [
    # records
    "Document",
    "Record",
    # results
    "AggregateStatus",
    "TrialResult",
    "TrialFailure",
    "AggregateResult",
]
