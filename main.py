"""
Main entrypoint: run the trust pipeline once over the configured CSV datasets.

Env: TRUSTFEED_SEED_ADDRESS, TRUSTFEED_DATA_DIR, TRUSTFEED_NUM_ITERATIONS, LOG_LEVEL, LOG_FORMAT, etc.
Flags are the same as `python -m trustfeed.tools.run_pipeline --help`.
"""

from trustfeed.tools.run_pipeline import main

if __name__ == "__main__":
    raise SystemExit(main())
