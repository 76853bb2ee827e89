"""
Data models for analysis engine input and output.

- TransactionRecord / TopicRecord: immutable input rows, loaded once per run.
- Phase1Result: vicinity and its global trust scores.
- Phase2Result: per-topic relevance scores.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, ClassVar

from trustfeed.analysis_engine.matrix import Vector


@dataclass(frozen=True)
class TransactionRecord:
    """One transfer edge: from_address -> to_address carrying value."""

    from_address: str
    to_address: str
    value: int
    timestamp: int | None = None
    """Optional column; not used by the trust computation."""

    CSV_COLUMNS: ClassVar[tuple[str, ...]] = ("from", "to", "value")
    OPTIONAL_COLUMNS: ClassVar[tuple[str, ...]] = ("timestamp",)

    @classmethod
    def from_row(cls, row: dict[str, str]) -> "TransactionRecord":
        value = int(row["value"])
        if value < 0:
            raise ValueError(f"value must be non-negative, got {value}")
        raw_ts = (row.get("timestamp") or "").strip()
        timestamp = int(raw_ts) if raw_ts else None
        if timestamp is not None and timestamp < 0:
            raise ValueError(f"timestamp must be non-negative, got {timestamp}")
        return cls(
            from_address=row["from"].strip(),
            to_address=row["to"].strip(),
            value=value,
            timestamp=timestamp,
        )


@dataclass(frozen=True)
class TopicRecord:
    """One observation of an address engaging with a topic at timestamp_hours."""

    from_address: str
    topic: str
    timestamp_hours: int

    CSV_COLUMNS: ClassVar[tuple[str, ...]] = ("from", "topic", "timestamp")
    OPTIONAL_COLUMNS: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def from_row(cls, row: dict[str, str]) -> "TopicRecord":
        timestamp = int(row["timestamp"])
        if timestamp < 0:
            raise ValueError(f"timestamp must be non-negative, got {timestamp}")
        return cls(
            from_address=row["from"].strip(),
            topic=row["topic"].strip(),
            timestamp_hours=timestamp,
        )


@dataclass
class Phase1Result:
    """
    Vicinity addresses and their global trust scores.

    index_mapping is derived from vicinity on first access and cached; it is not
    independent state and is left out of to_dict().
    """

    vicinity: list[str]
    global_scores: Vector

    def __post_init__(self) -> None:
        if len(self.vicinity) != len(self.global_scores):
            raise ValueError(
                f"vicinity has {len(self.vicinity)} addresses but {len(self.global_scores)} scores"
            )

    @cached_property
    def index_mapping(self) -> dict[str, int]:
        return {address: i for i, address in enumerate(self.vicinity)}

    def score_of(self, address: str) -> float:
        return float(self.global_scores[self.index_mapping[address]])

    def peers(self) -> list[tuple[str, float]]:
        """(address, score) rows in vicinity order."""
        return list(zip(self.vicinity, self.global_scores.tolist()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "vicinity": list(self.vicinity),
            "global_scores": self.global_scores.tolist(),
        }


@dataclass
class Phase2Result:
    """Parallel lists of topics and their aggregated decayed scores."""

    relevant_topics: list[str] = field(default_factory=list)
    topic_scores: list[float] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, scores: dict[str, float]) -> "Phase2Result":
        return cls(relevant_topics=list(scores.keys()), topic_scores=list(scores.values()))

    def rows(self) -> list[tuple[str, float]]:
        return list(zip(self.relevant_topics, self.topic_scores))

    def to_dict(self) -> dict[str, Any]:
        return {
            "relevant_topics": list(self.relevant_topics),
            "topic_scores": list(self.topic_scores),
        }
