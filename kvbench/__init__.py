"""kvbench: latency benchmark for persistent key-value storage backends."""

__version__ = "0.1.0"
