"""
Application settings.

Responsibilities:
- Load configuration from environment variables and the project .env file.
- Validate values and provide the reference defaults for optional ones.
- Resolve the {dataset_name -> file_path} mapping consumed by the pipeline.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from trustfeed.config.env import (
    env_bool,
    env_float,
    env_int,
    env_path,
    env_str,
    load_trustfeed_env,
)
from trustfeed.core.exceptions import ConfigError
from trustfeed.storage.paths import (
    PEERS_DATASET,
    TOPIC_SCORES_DATASET,
    TOPICS_DATASET,
    TRANSACTIONS_DATASET,
    resolve_datasets,
)

DEFAULT_SEED_ADDRESS = "0x857c86988c53c1bc5bff75edfb97893fa40a8000"
DEFAULT_DEPTH_LIMIT = 2
DEFAULT_NUM_ITERATIONS = 30
DEFAULT_PRE_TRUST_WEIGHT = 0.2
DEFAULT_TIME_DECAY_RATE = 0.7

# Env var per dataset path override
DATASET_ENV_VARS = {
    TRANSACTIONS_DATASET: "TRUSTFEED_TRANSACTIONS_CSV",
    TOPICS_DATASET: "TRUSTFEED_TOPICS_CSV",
    PEERS_DATASET: "TRUSTFEED_PEERS_OUT",
    TOPIC_SCORES_DATASET: "TRUSTFEED_TOPICS_OUT",
}


@dataclass(frozen=True)
class Settings:
    """
    Settings for one pipeline run.

    seed_address: Address the vicinity is built around; receives all pre-trust.
    depth_limit: Max hop count explored from the seed.
    num_iterations: Power-iteration rounds.
    pre_trust_weight: Share of pre-trust blended back in each round, in [0, 1].
    time_decay_rate: Per-hour decay base for topic activity.
    convergence_tolerance: Optional L1 threshold for early exit; None = fixed rounds.
    exclude_seed_loops: Drop trust directed back into the seed when building the matrix.
    now_hours: Fixed "now" in hours since epoch; None = wall clock.
    datasets: {dataset_name -> file_path} for inputs and outputs.
    """

    seed_address: str = DEFAULT_SEED_ADDRESS
    depth_limit: int = DEFAULT_DEPTH_LIMIT
    num_iterations: int = DEFAULT_NUM_ITERATIONS
    pre_trust_weight: float = DEFAULT_PRE_TRUST_WEIGHT
    time_decay_rate: float = DEFAULT_TIME_DECAY_RATE
    convergence_tolerance: float | None = None
    exclude_seed_loops: bool = False
    now_hours: float | None = None
    data_dir: Path = field(default_factory=Path.cwd)
    datasets: dict[str, Path] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.seed_address:
            raise ConfigError("seed_address must not be empty")
        if self.depth_limit < 0:
            raise ConfigError(f"depth_limit must be >= 0, got {self.depth_limit}")
        if self.num_iterations < 1:
            raise ConfigError(f"num_iterations must be >= 1, got {self.num_iterations}")
        if not 0.0 <= self.pre_trust_weight <= 1.0:
            raise ConfigError(f"pre_trust_weight must be in [0, 1], got {self.pre_trust_weight}")
        if self.convergence_tolerance is not None and self.convergence_tolerance <= 0:
            raise ConfigError(
                f"convergence_tolerance must be > 0, got {self.convergence_tolerance}"
            )
        if not self.datasets:
            object.__setattr__(self, "datasets", resolve_datasets(self.data_dir))

    def dataset_path(self, name: str) -> Path:
        try:
            return self.datasets[name]
        except KeyError:
            raise ConfigError(f"no path configured for dataset {name!r}") from None

    def with_overrides(self, **changes: Any) -> "Settings":
        """Return a copy with non-None values applied; dataset paths are merged, not replaced."""
        changes = {k: v for k, v in changes.items() if v is not None}
        datasets = changes.pop("datasets", None)
        if datasets:
            changes["datasets"] = {**self.datasets, **{k: Path(v) for k, v in datasets.items()}}
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "seed_address": self.seed_address,
            "depth_limit": self.depth_limit,
            "num_iterations": self.num_iterations,
            "pre_trust_weight": self.pre_trust_weight,
            "time_decay_rate": self.time_decay_rate,
            "convergence_tolerance": self.convergence_tolerance,
            "exclude_seed_loops": self.exclude_seed_loops,
            "now_hours": self.now_hours,
            "datasets": {k: str(v) for k, v in self.datasets.items()},
        }


def get_settings(data_dir: Path | str | None = None) -> Settings:
    """
    Return settings built from the environment (and .env).

    data_dir overrides TRUSTFEED_DATA_DIR; dataset paths default to
    <data_dir>/data/<name>.csv or <data_dir>/<name>.csv, with per-dataset env overrides.
    """
    load_trustfeed_env()
    base = Path(data_dir) if data_dir is not None else (env_path("TRUSTFEED_DATA_DIR") or Path.cwd())
    overrides = {
        name: path
        for name, var in DATASET_ENV_VARS.items()
        if (path := env_path(var)) is not None
    }
    return Settings(
        seed_address=env_str("TRUSTFEED_SEED_ADDRESS", DEFAULT_SEED_ADDRESS),
        depth_limit=env_int("TRUSTFEED_DEPTH_LIMIT", DEFAULT_DEPTH_LIMIT),
        num_iterations=env_int("TRUSTFEED_NUM_ITERATIONS", DEFAULT_NUM_ITERATIONS),
        pre_trust_weight=env_float("TRUSTFEED_PRE_TRUST_WEIGHT", DEFAULT_PRE_TRUST_WEIGHT),
        time_decay_rate=env_float("TRUSTFEED_TIME_DECAY_RATE", DEFAULT_TIME_DECAY_RATE),
        convergence_tolerance=env_float("TRUSTFEED_CONVERGENCE_TOLERANCE", None),
        exclude_seed_loops=env_bool("TRUSTFEED_EXCLUDE_SEED_LOOPS", False),
        now_hours=env_float("TRUSTFEED_NOW_HOURS", None),
        data_dir=base,
        datasets=resolve_datasets(base, overrides),
    )
