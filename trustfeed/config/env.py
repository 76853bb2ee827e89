"""
Environment variable loading and parsing for trustfeed.

- TRUSTFEED_SEED_ADDRESS: address the vicinity is built around
- TRUSTFEED_DEPTH_LIMIT, TRUSTFEED_NUM_ITERATIONS: search and propagation bounds
- TRUSTFEED_PRE_TRUST_WEIGHT, TRUSTFEED_TIME_DECAY_RATE: algorithm weights
- TRUSTFEED_DATA_DIR and per-dataset path overrides
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from trustfeed.core.exceptions import ConfigError

# Project root: config is trustfeed/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off", "")


def load_trustfeed_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides the process env."""
    load_dotenv(_ENV_PATH, override=False)


def _raw(name: str) -> str:
    return (os.getenv(name) or "").strip()


def env_str(name: str, default: str) -> str:
    return _raw(name) or default


def env_int(name: str, default: int) -> int:
    raw = _raw(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def env_float(name: str, default: float | None) -> float | None:
    raw = _raw(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def env_bool(name: str, default: bool) -> bool:
    raw = _raw(name).lower()
    if not raw:
        return default
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


def env_path(name: str) -> Path | None:
    raw = _raw(name)
    return Path(raw) if raw else None
