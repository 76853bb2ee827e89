"""
trustfeed pipeline runner — phase 1 (trust) and phase 2 (topics) in one pass.

Reads settings from the environment (.env supported), applies CLI flags on top,
loads the transactions and topics CSVs, writes peers and topics CSVs.

Usage:
  python -m trustfeed.tools.run_pipeline
  python -m trustfeed.tools.run_pipeline --seed 0xabc... --data-dir ./run1 --iterations 50
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from trustfeed.analytics.pipeline import run_pipeline
from trustfeed.config.settings import get_settings
from trustfeed.core.exceptions import FeedError
from trustfeed.feed_logging import get_logger
from trustfeed.storage import (
    PEERS_DATASET,
    TOPIC_SCORES_DATASET,
    TOPICS_DATASET,
    TRANSACTIONS_DATASET,
)

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="trustfeed",
        description="Compute vicinity trust scores and decayed topic relevance from CSV datasets.",
    )
    ap.add_argument("--seed", help="Seed address (default: TRUSTFEED_SEED_ADDRESS)")
    ap.add_argument("--data-dir", type=Path, help="Base directory for dataset CSVs")
    ap.add_argument("--transactions", type=Path, help="Transactions CSV (from,to,value[,timestamp])")
    ap.add_argument("--topics", type=Path, help="Topics CSV (from,topic,timestamp)")
    ap.add_argument("--peers-out", type=Path, help="Output CSV for address,score")
    ap.add_argument("--topics-out", type=Path, help="Output CSV for topic,score")
    ap.add_argument("--depth-limit", type=int, help="Max hops explored from the seed")
    ap.add_argument("--iterations", type=int, help="Propagation rounds")
    ap.add_argument("--pre-trust-weight", type=float, help="Pre-trust share per round, in [0, 1]")
    ap.add_argument("--decay-rate", type=float, help="Per-hour topic decay base")
    ap.add_argument("--tolerance", type=float, help="Stop early once the L1 change drops below this")
    ap.add_argument("--now-hours", type=float, help="Fixed current time in hours since epoch")
    ap.add_argument(
        "--exclude-seed-loops",
        action="store_true",
        default=None,
        help="Ignore trust directed back into the seed",
    )
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings(data_dir=args.data_dir)
        datasets = {
            name: path
            for name, path in (
                (TRANSACTIONS_DATASET, args.transactions),
                (TOPICS_DATASET, args.topics),
                (PEERS_DATASET, args.peers_out),
                (TOPIC_SCORES_DATASET, args.topics_out),
            )
            if path is not None
        }
        settings = settings.with_overrides(
            seed_address=args.seed,
            depth_limit=args.depth_limit,
            num_iterations=args.iterations,
            pre_trust_weight=args.pre_trust_weight,
            time_decay_rate=args.decay_rate,
            convergence_tolerance=args.tolerance,
            now_hours=args.now_hours,
            exclude_seed_loops=args.exclude_seed_loops,
            datasets=datasets,
        )
        phase1, phase2 = run_pipeline(settings)
    except FeedError as e:
        logger.error("pipeline_failed", error=str(e), error_type=type(e).__name__)
        return 1

    logger.info(
        "pipeline_summary",
        peers=phase1.peers(),
        topics=phase2.rows(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
