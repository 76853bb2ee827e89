"""
Topic relevance: attribute global trust to topics, decayed by recency.

For each (address, topic) pair (last record wins) whose address is in the
vicinity: contribution = decay_rate ** (now_hours - timestamp_hours) * trust(address),
summed per topic. Addresses outside the vicinity never contribute.
"""

from __future__ import annotations

from typing import Iterable, Mapping

import numpy as np

from trustfeed.analysis_engine.matrix import Vector
from trustfeed.analysis_engine.models import TopicRecord
from trustfeed.core.exceptions import ContractViolation
from trustfeed.feed_logging import get_logger

logger = get_logger(__name__)

TIME_DECAY_RATE = 0.7
"""Default per-hour decay base; in (0, 1) older activity counts less."""


def decay(now_hours: float, timestamp_hours: float, rate: float = TIME_DECAY_RATE) -> float:
    """
    Exponential decay factor rate ** age. Rates >= 1 or negative ages amplify.

    A factor too large for a float is inf rather than an error.
    """
    with np.errstate(over="ignore"):
        return float(np.power(np.float64(rate), np.float64(now_hours - timestamp_hours)))


def latest_topic_timestamps(records: Iterable[TopicRecord]) -> dict[tuple[str, str], int]:
    """Map (address, topic) -> timestamp_hours; later records overwrite earlier ones."""
    latest: dict[tuple[str, str], int] = {}
    for rec in records:
        latest[(rec.from_address, rec.topic)] = rec.timestamp_hours
    return latest


def score(
    vicinity: Iterable[str],
    index_mapping: Mapping[str, int],
    global_scores: Vector,
    topic_records: Iterable[TopicRecord],
    now_hours: float,
    decay_rate: float = TIME_DECAY_RATE,
) -> dict[str, float]:
    """
    Aggregate decayed, trust-weighted scores per topic.

    Returns:
        {topic: score} in first-seen topic order; no normalization.
    """
    members = set(vicinity)
    scores: dict[str, float] = {}
    skipped = 0
    for (address, topic), timestamp in latest_topic_timestamps(topic_records).items():
        if address not in members:
            skipped += 1
            continue
        idx = index_mapping.get(address)
        if idx is None:
            raise ContractViolation(f"vicinity address {address!r} has no index mapping")
        trust = global_scores[idx]
        if trust == 0.0:
            # inf * 0 would poison the topic sum with nan
            weighted = 0.0
        else:
            weighted = decay(now_hours, timestamp, decay_rate) * trust
        scores[topic] = scores.get(topic, 0.0) + weighted

    logger.debug(
        "topics_scored",
        topics=len(scores),
        skipped_outside_vicinity=skipped,
        now_hours=round(now_hours, 3),
        decay_rate=decay_rate,
    )
    return scores
