"""
Trust pipeline: run full analysis (vicinity -> local trust -> propagation -> topics).

Phase 1 turns transaction records into global trust scores for the seed's vicinity.
Phase 2 joins those scores with topic records. run_pipeline() wires both phases to
the CSV datasets named in Settings and writes the peers and topics outputs.
"""

from __future__ import annotations

import time
from typing import Sequence

from trustfeed.analysis_engine import neighborhood, propagation, topic_scorer, trust_matrix
from trustfeed.analysis_engine.models import (
    Phase1Result,
    Phase2Result,
    TopicRecord,
    TransactionRecord,
)
from trustfeed.config.settings import Settings
from trustfeed.feed_logging import bind_seed, get_logger
from trustfeed.storage import (
    PEERS_DATASET,
    TOPIC_SCORES_DATASET,
    TOPICS_DATASET,
    TRANSACTIONS_DATASET,
    CSVFileStorage,
)

logger = get_logger(__name__)

SECONDS_PER_HOUR = 3600.0
PEERS_COLUMNS = ("address", "score")
TOPICS_COLUMNS = ("topic", "score")


def current_hours() -> float:
    """Wall clock in hours since the Unix epoch."""
    return time.time() / SECONDS_PER_HOUR


def run_phase1(
    records: Sequence[TransactionRecord],
    seed: str,
    *,
    depth_limit: int = neighborhood.DEPTH_LIMIT,
    iterations: int = propagation.NUM_ITERATIONS,
    pre_trust_weight: float = propagation.PRE_TRUST_WEIGHT,
    tolerance: float | None = None,
    exclude_seed_loops: bool = False,
) -> Phase1Result:
    """Explore the seed's vicinity, build local trust and propagate global trust."""
    log = bind_seed(seed)
    vicinity = neighborhood.explore([seed], records, depth=0, limit=depth_limit)
    log.info("vicinity_built", vicinity_size=len(vicinity), depth_limit=depth_limit)

    matrix = trust_matrix.build(
        vicinity,
        records,
        exclude_self_loops_for=seed if exclude_seed_loops else None,
    )
    pre_trust = propagation.pre_trust_vector(vicinity, seed)
    result = propagation.TrustPropagator(
        matrix,
        pre_trust,
        pre_trust_weight=pre_trust_weight,
        iterations=iterations,
        tolerance=tolerance,
    ).run()
    log.info(
        "phase1_done",
        vicinity_size=len(vicinity),
        rounds=result.rounds,
        converged=result.converged,
        seed_score=round(result.scores[0], 6),
    )
    return Phase1Result(vicinity=vicinity, global_scores=result.scores)


def run_phase2(
    phase1: Phase1Result,
    topic_records: Sequence[TopicRecord],
    *,
    now_hours: float | None = None,
    decay_rate: float = topic_scorer.TIME_DECAY_RATE,
) -> Phase2Result:
    """Attribute phase-1 trust to topics with time decay relative to now_hours."""
    now = current_hours() if now_hours is None else now_hours
    scores = topic_scorer.score(
        phase1.vicinity,
        phase1.index_mapping,
        phase1.global_scores,
        topic_records,
        now_hours=now,
        decay_rate=decay_rate,
    )
    logger.info("phase2_done", topics=len(scores), now_hours=round(now, 3))
    return Phase2Result.from_mapping(scores)


def run_pipeline(settings: Settings) -> tuple[Phase1Result, Phase2Result]:
    """
    Load inputs, run both phases, save peers and topics.

    Raises IOFailure / MalformedRecord from storage; nothing is written if loading fails.
    """
    logger.info("pipeline_start", **settings.to_dict())

    tx_records = CSVFileStorage(
        settings.dataset_path(TRANSACTIONS_DATASET), TransactionRecord
    ).load()
    topic_records = CSVFileStorage(settings.dataset_path(TOPICS_DATASET), TopicRecord).load()

    phase1 = run_phase1(
        tx_records,
        settings.seed_address,
        depth_limit=settings.depth_limit,
        iterations=settings.num_iterations,
        pre_trust_weight=settings.pre_trust_weight,
        tolerance=settings.convergence_tolerance,
        exclude_seed_loops=settings.exclude_seed_loops,
    )
    phase2 = run_phase2(
        phase1,
        topic_records,
        now_hours=settings.now_hours,
        decay_rate=settings.time_decay_rate,
    )

    CSVFileStorage(settings.dataset_path(PEERS_DATASET)).save(phase1.peers(), PEERS_COLUMNS)
    CSVFileStorage(settings.dataset_path(TOPIC_SCORES_DATASET)).save(phase2.rows(), TOPICS_COLUMNS)

    logger.info(
        "pipeline_done",
        peers=len(phase1.vicinity),
        topics=len(phase2.relevant_topics),
    )
    return phase1, phase2
