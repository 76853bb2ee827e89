"""
Local trust matrix: aggregate transaction value per edge over the vicinity, then row-normalize.

Order of operations per row:
  1. fill summed outgoing weight toward every vicinity address (missing edge = 0)
  2. zero the diagonal (no self-trust)
  3. a row that now sums to 0 is dangling: replace with ones everywhere except the diagonal
  4. divide by the row sum

Every row of the result sums to 1 and the diagonal is 0. A one-address vicinity has
no cell besides its diagonal, so its single row stays [0.0].
"""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

import numpy as np

from trustfeed.analysis_engine.matrix import Matrix
from trustfeed.analysis_engine.models import TransactionRecord
from trustfeed.feed_logging import get_logger, short_address

logger = get_logger(__name__)


def aggregate_outgoing_weights(
    vicinity: Sequence[str],
    records: Sequence[TransactionRecord],
) -> dict[tuple[str, str], int]:
    """
    Sum record values per (from, to) edge for every edge whose source is in the vicinity.

    Targets are not restricted; edges leaving the vicinity are kept here and
    dropped at matrix fill time.
    """
    sources = set(vicinity)
    weights: dict[tuple[str, str], int] = defaultdict(int)
    for rec in records:
        if rec.from_address in sources:
            weights[(rec.from_address, rec.to_address)] += rec.value
    return dict(weights)


def build(
    vicinity: Sequence[str],
    records: Sequence[TransactionRecord],
    exclude_self_loops_for: str | None = None,
) -> Matrix:
    """
    Build the row-stochastic local trust matrix over vicinity.

    Args:
        vicinity: Ordered unique addresses; position = matrix index.
        records: Transaction records.
        exclude_self_loops_for: Optional address (normally the seed) whose incoming
            trust is not recorded from edges, so trust cannot loop straight back to it.
            Dangling rows still spread uniformly over it.

    Returns:
        N x N Matrix, diagonal 0, rows summing to 1.
    """
    size = len(vicinity)
    index = {address: i for i, address in enumerate(vicinity)}
    weights = aggregate_outgoing_weights(vicinity, records)

    local = np.zeros((size, size), dtype=np.float64)
    for (src, dst), weight in weights.items():
        if dst == exclude_self_loops_for:
            continue
        j = index.get(dst)
        if j is None:
            continue
        local[index[src], j] = float(weight)

    np.fill_diagonal(local, 0.0)
    dangling = local.sum(axis=1) == 0.0
    local[dangling] = 1.0
    np.fill_diagonal(local, 0.0)

    sums = local.sum(axis=1, keepdims=True)
    normalized = np.divide(local, sums, out=np.zeros_like(local), where=sums > 0.0)

    logger.debug(
        "trust_matrix_built",
        size=size,
        edges=len(weights),
        dangling_rows=int(dangling.sum()),
        excluded_target=short_address(exclude_self_loops_for) if exclude_self_loops_for else None,
    )
    return Matrix(normalized)
