"""
Benchmark Orchestrator

Runs every workload against every backend in order, reports each aggregate
as it completes and closes the backends when the session ends.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from kvbench.core.backends.base import Backend
from kvbench.core.trials import DEFAULT_TRIAL_COUNT, TrialAggregator
from kvbench.core.workload_generators import WorkloadGenerator, default_workloads
from kvbench.models.results import AggregateResult

logger = logging.getLogger(__name__)


def format_result(result: AggregateResult) -> str:
    """
    One human-readable line per (backend, workload) pair.

    Example:
        Basic Test: LevelDB took: 12.31, 10.02, 9.87ms (average: 11ms)
    """
    durations = ", ".join(f"{d:.2f}" for d in result.durations_ms) or "-"
    mean = "N/A" if result.mean_ms is None else f"{round(result.mean_ms)}ms"
    line = (
        f"{result.workload_name} Test: {result.backend_name} took: "
        f"{durations}ms (average: {mean})"
    )
    if result.failures:
        details = "; ".join(
            f"trial {f.trial_index} {f.error_kind}: {f.message}" for f in result.failures
        )
        line += f" FAILED [{details}]"
    return line


class BenchmarkOrchestrator:
    """
    Runs every workload against every backend.

    Backends and workloads are iterated in the order given, one pair at a
    time. A failed pair is reported and the session moves on to the next one.
    """

    def __init__(
        self,
        backends: Sequence[Backend],
        workloads: Optional[Sequence[WorkloadGenerator]] = None,
        trial_count: int = DEFAULT_TRIAL_COUNT,
        aggregator: Optional[TrialAggregator] = None,
        on_result: Optional[Callable[[AggregateResult], None]] = None,
    ) -> None:
        if not backends:
            raise ValueError("At least one backend is required")
        self.backends = list(backends)
        self.workloads = list(workloads) if workloads is not None else default_workloads()
        self.trial_count = trial_count
        self.aggregator = aggregator or TrialAggregator()
        self.on_result = on_result

    def _check_logging_level(self) -> None:
        """Warn if verbose logging is enabled during measurement."""
        current_level = logging.getLogger().getEffectiveLevel()
        if current_level < logging.INFO:
            logger.warning(
                "Verbose logging (%s) is enabled. This may affect benchmark timing! "
                "Set log level to INFO or higher for accurate measurements.",
                logging.getLevelName(current_level),
            )

    async def run(self) -> List[AggregateResult]:
        """
        Run the full backend x workload x trial matrix.

        Returns:
            One AggregateResult per (backend, workload) pair, in run order
        """
        self._check_logging_level()
        results: List[AggregateResult] = []

        try:
            for backend in self.backends:
                for workload in self.workloads:
                    logger.info(
                        f"Running {workload.name} workload on {backend.name} "
                        f"({self.trial_count} trials)"
                    )
                    result = await self.aggregator.run_trials(
                        backend, workload, self.trial_count
                    )
                    if result.failures:
                        logger.error(
                            f"{workload.name} on {backend.name} failed in "
                            f"{len(result.failures)}/{result.trial_count} trials"
                        )
                    results.append(result)
                    if self.on_result is not None:
                        self.on_result(result)
        finally:
            for backend in self.backends:
                try:
                    await backend.close()
                except Exception as e:
                    logger.error(f"Error closing backend {backend.name}: {e}")

        return results
