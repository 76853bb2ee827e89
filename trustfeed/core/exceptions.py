"""
Application-level exceptions.

- IOFailure: an input or output file could not be opened, read or written.
- MalformedRecord: a row does not parse into the expected record shape.
- ContractViolation: a caller broke an invariant (dimension mismatch, bad weight,
  seed outside the vicinity). Subclasses ValueError so it reads as an invalid argument.
- ConfigError: an environment or CLI value could not be interpreted.
"""

from __future__ import annotations

from pathlib import Path


class FeedError(Exception):
    """Base class for all trustfeed errors."""


class IOFailure(FeedError):
    """Underlying file could not be opened, read or written. Not retried."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"IOFailure: {self.path}: {reason}")


class MalformedRecord(FeedError):
    """A row failed to parse; loading stops at the first bad row."""

    def __init__(self, path: Path | str, line: int, reason: str) -> None:
        self.path = Path(path)
        self.line = line
        self.reason = reason
        super().__init__(f"MalformedRecord: {self.path}:{line}: {reason}")


class ContractViolation(FeedError, ValueError):
    """Programming-contract violation; raised instead of producing wrong numbers."""


class ConfigError(FeedError):
    """Invalid configuration value."""
