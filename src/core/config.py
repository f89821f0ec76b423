"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting the CLI.
- Lets the aggregator, the simulated sources and the CLI read one consistent
  configuration contract.
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) without leaking that logic
      into the Core.
    - A single configuration contract shared by services and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="USER_AGG_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    id_min: int = Field(
        default=1,
        description="Smallest valid user identifier (inclusive).",
    )
    id_max: int = Field(
        default=10,
        description="Largest valid user identifier (inclusive).",
    )
    store_error_marker: str = Field(
        default="db",
        min_length=1,
        description="Text fragment that marks an untagged error as a store failure.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Root log level for the CLI (DEBUG, INFO, WARNING...).",
    )

    # Simulated sources
    sim_latency_min_ms: int = Field(
        default=10,
        ge=0,
        description="Minimum simulated latency per backing call (ms).",
    )
    sim_latency_max_ms: int = Field(
        default=50,
        ge=0,
        description="Maximum simulated latency per backing call (ms).",
    )
    sim_seed: int | None = Field(
        default=None,
        description="Seed for simulated latency (None = non-deterministic).",
    )

    bench_iterations: int = Field(
        default=100,
        ge=1,
        le=100_000,
        description="Default iteration count for the `bench` command.",
    )

    @model_validator(mode="after")
    def _check_ranges(self) -> "AppSettings":
        if self.id_min > self.id_max:
            raise ValueError(f"id_min ({self.id_min}) must be <= id_max ({self.id_max})")
        if self.sim_latency_min_ms > self.sim_latency_max_ms:
            raise ValueError("sim_latency_min_ms must be <= sim_latency_max_ms")
        return self
