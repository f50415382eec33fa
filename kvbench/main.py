#!/usr/bin/env python3
"""
kvbench - Command Line Entry Point

Runs every selected workload against every selected backend and prints one
line (or one JSON object) per (backend, workload) pair to stdout. Logs go to
stderr and, optionally, to settings.LOG_FILE.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from kvbench.config import settings
from kvbench.core.backends import Backend, BackendKind, create_backends
from kvbench.core.orchestrator import BenchmarkOrchestrator, format_result
from kvbench.core.runner import BenchmarkRunner
from kvbench.core.trials import TrialAggregator
from kvbench.core.workload_generators import (
    WorkloadGenerator,
    WorkloadType,
    create_workload,
)
from kvbench.models.results import AggregateResult

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kvbench",
        description="Benchmark persistent key-value backends under fixed workloads.",
    )
    parser.add_argument(
        "--backend",
        action="append",
        choices=[k.value for k in BackendKind],
        default=None,
        help="Backend to benchmark (repeatable). Defaults to settings.BACKENDS.",
    )
    parser.add_argument(
        "--workload",
        action="append",
        choices=[w.value for w in WorkloadType],
        default=None,
        help="Workload to run (repeatable). Defaults to all workloads.",
    )
    parser.add_argument(
        "--trials",
        type=int,
        default=settings.TRIAL_COUNT,
        help="Trials per (backend, workload) pair.",
    )
    parser.add_argument(
        "--operations",
        type=int,
        default=settings.OPERATION_COUNT,
        help="Records written and read per trial.",
    )
    parser.add_argument(
        "--data-dir",
        default=settings.DATA_DIR,
        help="Parent directory for backend databases.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as a JSON array instead of text lines.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level for stderr output.",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
            if settings.LOG_FILE
            else logging.NullHandler(),
        ],
    )


async def _run(
    args: argparse.Namespace,
    backends: List[Backend],
    workloads: List[WorkloadGenerator],
) -> List[AggregateResult]:
    def _print_line(result: AggregateResult) -> None:
        print(format_result(result), flush=True)

    orchestrator = BenchmarkOrchestrator(
        backends,
        workloads,
        trial_count=args.trials,
        aggregator=TrialAggregator(BenchmarkRunner(args.operations)),
        on_result=None if args.json else _print_line,
    )
    return await orchestrator.run()


def exit_code_for(results: List[AggregateResult]) -> int:
    """1 if any (backend, workload) pair produced no successful trial."""
    return 1 if any(r.all_failed for r in results) else 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.trials < 1:
        parser.error("--trials must be >= 1")
    if args.operations < 1:
        parser.error("--operations must be >= 1")

    _configure_logging(args.log_level)

    try:
        backends = create_backends(
            args.backend or settings.BACKENDS,
            data_dir=args.data_dir,
            seed_count=settings.SEED_RECORD_COUNT,
        )
        workloads = [create_workload(w) for w in (args.workload or list(WorkloadType))]
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    try:
        results = asyncio.run(_run(args, backends, workloads))
    except KeyboardInterrupt:
        print("[kvbench] interrupted", file=sys.stderr)
        return 130

    if args.json:
        print(json.dumps([r.model_dump(mode="json") for r in results], indent=2))

    return exit_code_for(results)


if __name__ == "__main__":
    raise SystemExit(main())
