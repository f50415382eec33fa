"""Trial aggregation: repeat a (backend, workload) pair and collect durations."""

import logging
from typing import Optional

from kvbench.core.backends.base import Backend
from kvbench.core.errors import RunError
from kvbench.core.runner import BenchmarkRunner
from kvbench.core.workload_generators import WorkloadGenerator
from kvbench.models.results import AggregateResult, TrialFailure, TrialResult

logger = logging.getLogger(__name__)

DEFAULT_TRIAL_COUNT = 5


class TrialAggregator:
    """Runs trials strictly one after another and records each outcome."""

    def __init__(self, runner: Optional[BenchmarkRunner] = None):
        self.runner = runner or BenchmarkRunner()

    async def run_trials(
        self,
        backend: Backend,
        workload: WorkloadGenerator,
        trial_count: int = DEFAULT_TRIAL_COUNT,
    ) -> AggregateResult:
        """
        Run ``trial_count`` trials.

        A RunError voids only its own trial: it is logged, recorded as a
        TrialFailure and the remaining trials still run. Anything else
        propagates.
        """
        if trial_count < 1:
            raise ValueError(f"trial_count must be >= 1, got {trial_count}")

        result = AggregateResult(backend_name=backend.name, workload_name=workload.name)

        for trial_index in range(trial_count):
            try:
                duration_ms = await self.runner.run(backend, workload)
            except RunError as e:
                logger.warning(
                    f"{workload.name} on {backend.name}: trial {trial_index} "
                    f"failed ({e.kind}): {e}"
                )
                result.failures.append(
                    TrialFailure(
                        trial_index=trial_index,
                        error_kind=e.kind,
                        message=str(e),
                        operation_index=e.index,
                    )
                )
                continue

            result.trials.append(
                TrialResult(trial_index=trial_index, duration_ms=duration_ms)
            )
            logger.info(
                f"{workload.name} on {backend.name}: trial {trial_index} "
                f"took {duration_ms:.2f}ms"
            )

        return result
