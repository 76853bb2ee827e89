"""
structlog configuration for pipeline runs.

Every record carries level, ISO-8601 UTC timestamp, the event name and the emitting
module under "logger". LOG_FORMAT=json (default) renders one JSON object per
line with the event name under event_type; any other value gives the coloured
console renderer for local runs.

Imports nothing else from trustfeed, so any module can import it first.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

ADDRESS_DISPLAY_LEN = 16


def _event_type_key(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Log calls name an event; emit it as event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_structlog() -> None:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    if LOG_FORMAT == "json":
        processors += [_event_type_key, structlog.processors.JSONRenderer()]
    else:
        # ConsoleRenderer reads the message from "event"; leave it in place
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def short_address(address: str) -> str:
    """0x857c86988c53c1bc5bff75edfb97893fa40a8000 -> 0x857c86988c53c1... (first 16 chars)"""
    if len(address) > ADDRESS_DISPLAY_LEN:
        return address[:ADDRESS_DISPLAY_LEN] + "..."
    return address


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Module logger; pass the event name first, context as keywords:
        get_logger(__name__).info("vicinity_built", seed=short_address(seed), vicinity_size=12)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_seed(seed: str) -> structlog.BoundLogger:
    """Logger with the (shortened) seed address on every record of a run."""
    return get_logger("trustfeed").bind(seed=short_address(seed))
