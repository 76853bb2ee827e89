"""
Storage layer — CSV inputs and outputs addressed by dataset name.
"""

from trustfeed.storage.csv_storage import CSVFileStorage
from trustfeed.storage.paths import (
    DATASET_NAMES,
    PEERS_DATASET,
    TOPIC_SCORES_DATASET,
    TOPICS_DATASET,
    TRANSACTIONS_DATASET,
    get_data_path,
    resolve_datasets,
)

__all__ = [
    "CSVFileStorage",
    "DATASET_NAMES",
    "PEERS_DATASET",
    "TOPIC_SCORES_DATASET",
    "TOPICS_DATASET",
    "TRANSACTIONS_DATASET",
    "get_data_path",
    "resolve_datasets",
]
