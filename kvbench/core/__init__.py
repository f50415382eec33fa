"""
Benchmark engine.

- backends: uniform adapter contract over concrete storage engines
- workload_generators: deterministic Basic / Packet / Event workloads
- runner, trials, orchestrator: timed execution and aggregation
"""
