"""
Vicinity discovery: depth-bounded reachability from seed addresses over from->to edges.

Breadth-first worklist of (address, depth) pairs over an outgoing-edge index built
once per call. An address is reached first at its shortest hop distance from the
seeds, so the result is every address within `limit` hops. Output order is
first-discovered, which keeps matrix indices reproducible across runs.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Sequence

from trustfeed.analysis_engine.models import TransactionRecord
from trustfeed.feed_logging import get_logger, short_address

logger = get_logger(__name__)

DEPTH_LIMIT = 2
"""Max hop distance explored (1 = direct counterparties, 2 = their counterparties)."""


def build_outgoing_index(records: Iterable[TransactionRecord]) -> dict[str, list[str]]:
    """Return {from_address: [to_address, ...]} in record order, duplicates kept."""
    index: dict[str, list[str]] = {}
    for rec in records:
        index.setdefault(rec.from_address, []).append(rec.to_address)
    return index


def _ordered_seeds(seeds: Iterable[str]) -> list[str]:
    # Sets have no stable order across interpreter runs; sort them.
    if isinstance(seeds, (set, frozenset)):
        return sorted(seeds)
    return list(seeds)


def explore(
    seeds: Iterable[str],
    records: Sequence[TransactionRecord],
    depth: int = 0,
    limit: int = DEPTH_LIMIT,
) -> list[str]:
    """
    Return the unique addresses reachable from seeds within the depth bound.

    Seeds start at `depth`; addresses at depth d < limit expand to the `to`
    endpoints of their outgoing records at d + 1. When depth > limit nothing is
    explored and [] is returned. Seeds are always included otherwise.

    Args:
        seeds: Starting addresses.
        records: Transaction records (edges).
        depth: Depth assigned to the seeds (default 0).
        limit: Deepest level still included (default DEPTH_LIMIT).

    Returns:
        Addresses in first-discovered order.
    """
    if depth > limit:
        return []

    outgoing = build_outgoing_index(records)
    seen: set[str] = set()
    vicinity: list[str] = []
    queue: deque[tuple[str, int]] = deque()
    seed_list = _ordered_seeds(seeds)

    for seed in seed_list:
        if seed in seen:
            continue
        seen.add(seed)
        vicinity.append(seed)
        queue.append((seed, depth))

    while queue:
        address, d = queue.popleft()
        if d >= limit:
            continue
        for neighbor in outgoing.get(address, ()):
            if neighbor in seen:
                continue
            seen.add(neighbor)
            vicinity.append(neighbor)
            queue.append((neighbor, d + 1))

    logger.debug(
        "vicinity_explored",
        seeds=[short_address(s) for s in seed_list],
        vicinity_size=len(vicinity),
        start_depth=depth,
        limit=limit,
    )
    return vicinity
