"""
Benchmark Result Models

Defines Pydantic models for per-trial measurements and the aggregate
reported for each (backend, workload) pair.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class AggregateStatus(str, Enum):
    """Outcome of a (backend, workload) pair."""

    COMPLETED = "completed"
    FAILED = "failed"


class TrialResult(BaseModel):
    """Elapsed time of one successful trial."""

    trial_index: int = Field(..., ge=0, description="Zero-based trial index")
    duration_ms: float = Field(..., ge=0.0, description="Timed write+read phase (ms)")


class TrialFailure(BaseModel):
    """Why a trial produced no measurement."""

    trial_index: int = Field(..., ge=0, description="Zero-based trial index")
    error_kind: str = Field(..., description="setup, write, read or mismatch")
    message: str = Field(..., description="Error message")
    operation_index: Optional[int] = Field(
        None, description="Workload index the trial failed at"
    )


class AggregateResult(BaseModel):
    """
    Collected trials for one (backend, workload) pair.

    The mean is taken over successful trials only. A pair with any failed
    trial is reported as failed even when some trials succeeded.
    """

    backend_name: str = Field(..., description="Backend display name")
    workload_name: str = Field(..., description="Workload display name")
    trials: List[TrialResult] = Field(default_factory=list)
    failures: List[TrialFailure] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def durations_ms(self) -> List[float]:
        return [t.duration_ms for t in self.trials]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def mean_ms(self) -> Optional[float]:
        if not self.trials:
            return None
        return sum(self.durations_ms) / len(self.trials)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> AggregateStatus:
        if self.failures:
            return AggregateStatus.FAILED
        return AggregateStatus.COMPLETED

    @property
    def trial_count(self) -> int:
        return len(self.trials) + len(self.failures)

    @property
    def all_failed(self) -> bool:
        """True when no trial produced a measurement."""
        return not self.trials
