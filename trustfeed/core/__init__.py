"""
Core utilities — exceptions and cross-cutting concerns shared by the
analysis engine, storage layer, pipeline and CLI.
"""

from trustfeed.core.exceptions import (
    ConfigError,
    ContractViolation,
    FeedError,
    IOFailure,
    MalformedRecord,
)

__all__ = [
    "ConfigError",
    "ContractViolation",
    "FeedError",
    "IOFailure",
    "MalformedRecord",
]
