"""
Analytics — end-to-end trust pipeline over CSV datasets.
"""

from trustfeed.analytics.pipeline import (
    current_hours,
    run_phase1,
    run_phase2,
    run_pipeline,
)

__all__ = ["current_hours", "run_phase1", "run_phase2", "run_pipeline"]
