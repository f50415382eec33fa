"""
kvbench Configuration

Application settings loaded from environment variables (prefix ``KVBENCH_``)
or an optional ``.env`` file. Command line flags override these values.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kvbench.core.backends.leveldb_store import leveldb_available


def default_backends() -> List[str]:
    """LevelDB, TinyDB and SQLite; LevelDB only when plyvel is installed."""
    kinds = ["tinydb", "sqlite"]
    if leveldb_available():
        kinds.insert(0, "leveldb")
    return kinds


class Settings(BaseSettings):
    """Benchmark session settings."""

    model_config = SettingsConfigDict(
        env_prefix="KVBENCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_FORMAT: str = Field(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        description="logging.Formatter format string",
    )
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # Storage
    DATA_DIR: str = Field(
        "./kvbench_data", description="Parent directory for backend databases"
    )
    BACKENDS: List[str] = Field(
        default_factory=default_backends,
        description="Backends to benchmark, in run order",
    )

    # Workload sizing
    TRIAL_COUNT: int = Field(5, ge=1, description="Trials per (backend, workload)")
    OPERATION_COUNT: int = Field(
        200, ge=1, description="Records written and read per trial"
    )
    SEED_RECORD_COUNT: int = Field(
        200, ge=0, description="Startup records seeded by every start()"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


settings = Settings()
