"""
Analysis engine package — vicinity discovery, local trust, propagation, topic scoring.

Consumes transaction and topic records and produces per-address global trust
scores and per-topic relevance scores. All functions are pure given their inputs.
"""

from trustfeed.analysis_engine.matrix import Matrix, Vector
from trustfeed.analysis_engine.models import (
    Phase1Result,
    Phase2Result,
    TopicRecord,
    TransactionRecord,
)
from trustfeed.analysis_engine.neighborhood import (
    DEPTH_LIMIT,
    build_outgoing_index,
    explore,
)
from trustfeed.analysis_engine.trust_matrix import (
    aggregate_outgoing_weights,
    build,
)
from trustfeed.analysis_engine.propagation import (
    NUM_ITERATIONS,
    PRE_TRUST_WEIGHT,
    PropagationResult,
    TrustPropagator,
    pre_trust_vector,
    propagate,
)
from trustfeed.analysis_engine.topic_scorer import (
    TIME_DECAY_RATE,
    decay,
    latest_topic_timestamps,
    score,
)

__all__ = [
    "Matrix",
    "Vector",
    "Phase1Result",
    "Phase2Result",
    "TopicRecord",
    "TransactionRecord",
    "DEPTH_LIMIT",
    "build_outgoing_index",
    "explore",
    "aggregate_outgoing_weights",
    "build",
    "NUM_ITERATIONS",
    "PRE_TRUST_WEIGHT",
    "PropagationResult",
    "TrustPropagator",
    "pre_trust_vector",
    "propagate",
    "TIME_DECAY_RATE",
    "decay",
    "latest_topic_timestamps",
    "score",
]
