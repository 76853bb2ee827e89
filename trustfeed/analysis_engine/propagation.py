"""
Trust propagation: EigenTrust power iteration with pre-trust damping.

Each round:
  propagated = transpose(M) . scores
  scores = propagated * (1 - w) + pre_trust * w

Runs a fixed number of rounds by default. An optional L1 tolerance enables
early exit when the scores stop moving. No final normalization; with
non-negative inputs the output is non-negative.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from trustfeed.analysis_engine.matrix import Matrix, Vector
from trustfeed.core.exceptions import ContractViolation
from trustfeed.feed_logging import get_logger

logger = get_logger(__name__)

NUM_ITERATIONS = 30
"""Default number of propagation rounds."""

PRE_TRUST_WEIGHT = 0.2
"""Default share of pre-trust re-injected each round."""


def pre_trust_vector(vicinity: Sequence[str], seed: str) -> Vector:
    """One-hot pre-trust at the seed's index."""
    try:
        index = list(vicinity).index(seed)
    except ValueError:
        raise ContractViolation(f"seed {seed!r} is not in the vicinity") from None
    return Vector.one_hot(len(vicinity), index)


@dataclass(frozen=True)
class PropagationResult:
    """Final scores and how many rounds produced them."""

    scores: Vector
    rounds: int
    converged: bool


class TrustPropagator:
    """
    Power iteration over a local trust matrix.

    Arguments are validated here so a bad call fails before any round runs.
    """

    def __init__(
        self,
        matrix: Matrix,
        pre_trust: Vector,
        pre_trust_weight: float = PRE_TRUST_WEIGHT,
        iterations: int = NUM_ITERATIONS,
        tolerance: float | None = None,
    ) -> None:
        if not matrix.is_square:
            raise ContractViolation(f"trust matrix must be square, got {matrix.rows}x{matrix.cols}")
        if matrix.rows != len(pre_trust):
            raise ContractViolation(
                f"trust matrix has {matrix.rows} rows but pre-trust has {len(pre_trust)} entries"
            )
        if not 0.0 <= pre_trust_weight <= 1.0:
            raise ContractViolation(f"pre_trust_weight must be in [0, 1], got {pre_trust_weight}")
        if iterations < 1:
            raise ContractViolation(f"iterations must be >= 1, got {iterations}")
        if tolerance is not None and tolerance <= 0:
            raise ContractViolation(f"tolerance must be > 0, got {tolerance}")

        self.matrix = matrix
        self.pre_trust = pre_trust
        self.pre_trust_weight = pre_trust_weight
        self.iterations = iterations
        self.tolerance = tolerance
        self._transposed = matrix.transpose()
        self._injected = pre_trust.scale(pre_trust_weight)

    def step(self, scores: Vector) -> Vector:
        """One round: propagate along incoming edges, then blend in pre-trust."""
        propagated = self._transposed.mul_vec(scores)
        return propagated.scale(1.0 - self.pre_trust_weight).add(self._injected)

    def run(self) -> PropagationResult:
        scores = self.pre_trust
        rounds = 0
        converged = False
        for _ in range(self.iterations):
            updated = self.step(scores)
            rounds += 1
            if self.tolerance is not None and updated.l1_distance(scores) < self.tolerance:
                scores = updated
                converged = True
                break
            scores = updated

        logger.debug(
            "propagation_done",
            size=len(scores),
            rounds=rounds,
            converged=converged,
            pre_trust_weight=self.pre_trust_weight,
            score_sum=round(scores.sum(), 6),
        )
        return PropagationResult(scores=scores, rounds=rounds, converged=converged)


def propagate(
    matrix: Matrix,
    pre_trust: Vector,
    pre_trust_weight: float = PRE_TRUST_WEIGHT,
    iterations: int = NUM_ITERATIONS,
    tolerance: float | None = None,
) -> Vector:
    """Run the power iteration and return the global trust vector."""
    return TrustPropagator(
        matrix,
        pre_trust,
        pre_trust_weight=pre_trust_weight,
        iterations=iterations,
        tolerance=tolerance,
    ).run().scores
