"""
Structured logging for trustfeed.

JSON logs with timestamp, event_type and run context (seed, sizes, iterations).
Use get_logger() in all modules for aggregation-friendly output.
"""

from trustfeed.feed_logging.logger import bind_seed, get_logger, short_address

__all__ = ["bind_seed", "get_logger", "short_address"]
