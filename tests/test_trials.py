"""
Tests for TrialAggregator.

Sequential trials, per-trial failure recording and mean computation.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from kvbench.core.errors import BackendError, ReadError, SetupError
from kvbench.core.runner import BenchmarkRunner
from kvbench.core.trials import TrialAggregator
from kvbench.core.workload_generators import BasicWorkload, PacketWorkload
from kvbench.models.results import AggregateStatus


def _mock_runner(side_effect) -> MagicMock:
    runner = MagicMock(spec=BenchmarkRunner)
    runner.run = AsyncMock(side_effect=side_effect)
    return runner


@pytest.mark.asyncio
class TestRunTrials:
    async def test_all_trials_succeed(self, memory_backend) -> None:
        runner = _mock_runner([10.0, 12.0, 11.0, 9.0, 13.0])
        result = await TrialAggregator(runner).run_trials(
            memory_backend, BasicWorkload(), trial_count=5
        )

        assert result.durations_ms == [10.0, 12.0, 11.0, 9.0, 13.0]
        assert result.mean_ms == pytest.approx(11.0)
        assert result.status == AggregateStatus.COMPLETED
        assert result.backend_name == "Memory"
        assert result.workload_name == "Basic"
        assert runner.run.await_count == 5

    async def test_trial_three_read_failure(self, memory_backend) -> None:
        """One failed trial is recorded; the other four still count."""
        runner = _mock_runner(
            [4.0, 6.0, 5.0, ReadError(17, BackendError("read refused")), 5.0]
        )
        result = await TrialAggregator(runner).run_trials(
            memory_backend, BasicWorkload(), trial_count=5
        )

        assert result.durations_ms == [4.0, 6.0, 5.0, 5.0]
        assert [t.trial_index for t in result.trials] == [0, 1, 2, 4]
        assert result.mean_ms == pytest.approx(5.0)
        assert result.status == AggregateStatus.FAILED
        assert not result.all_failed

        assert len(result.failures) == 1
        failure = result.failures[0]
        assert failure.trial_index == 3
        assert failure.error_kind == "read"
        assert failure.operation_index == 17
        assert "read refused" in failure.message

    async def test_every_trial_fails(self, memory_backend) -> None:
        runner = _mock_runner(SetupError("Memory", BackendError("disk full")))
        result = await TrialAggregator(runner).run_trials(
            memory_backend, PacketWorkload(), trial_count=3
        )

        assert result.durations_ms == []
        assert result.mean_ms is None
        assert result.all_failed
        assert [f.error_kind for f in result.failures] == ["setup"] * 3
        assert result.failures[0].operation_index is None

    async def test_unexpected_errors_propagate(self, memory_backend) -> None:
        runner = _mock_runner(RuntimeError("bug"))
        with pytest.raises(RuntimeError, match="bug"):
            await TrialAggregator(runner).run_trials(memory_backend, BasicWorkload())

    async def test_real_runner_failures(self, scripted_backend) -> None:
        backend = scripted_backend(fail_lookup_keys={"key17"})
        try:
            result = await TrialAggregator(BenchmarkRunner()).run_trials(
                backend, BasicWorkload(), trial_count=2
            )
        finally:
            await backend.close()

        assert [f.error_kind for f in result.failures] == ["read", "read"]
        assert backend.open_calls == 2

    async def test_trial_count_must_be_positive(self, memory_backend) -> None:
        with pytest.raises(ValueError):
            await TrialAggregator().run_trials(memory_backend, BasicWorkload(), 0)
