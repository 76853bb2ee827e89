"""
Dataset path resolution.

Datasets are addressed by name. A name resolves to <base>/data/<name>.csv when
<base>/data exists, otherwise to <base>/<name>.csv. Callers may override any
name with an explicit path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

TRANSACTIONS_DATASET = "eoa-to-eoa"
TOPICS_DATASET = "eoa-to-topic"
PEERS_DATASET = "peers"
TOPIC_SCORES_DATASET = "topics"

DATASET_NAMES = (
    TRANSACTIONS_DATASET,
    TOPICS_DATASET,
    PEERS_DATASET,
    TOPIC_SCORES_DATASET,
)

DATA_SUBDIR = "data"


def get_data_path(name: str, base_dir: Path | str | None = None) -> Path:
    """Return the CSV path for dataset `name` under base_dir (default: cwd)."""
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    data_dir = base / DATA_SUBDIR
    if data_dir.is_dir():
        return data_dir / f"{name}.csv"
    return base / f"{name}.csv"


def resolve_datasets(
    base_dir: Path | str | None = None,
    overrides: Mapping[str, Path | str] | None = None,
) -> dict[str, Path]:
    """Build the {dataset_name -> file_path} mapping for all known datasets."""
    resolved = {name: get_data_path(name, base_dir) for name in DATASET_NAMES}
    for name, path in (overrides or {}).items():
        resolved[name] = Path(path)
    return resolved
