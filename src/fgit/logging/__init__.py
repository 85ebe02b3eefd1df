"""Structured logging utilities."""

from .events import (
    EventLogger,
    JsonlEventLogger,
    LogEvent,
    NullEventLogger,
    sanitize_arguments,
    utc_timestamp,
)

__all__ = [
    "EventLogger",
    "JsonlEventLogger",
    "LogEvent",
    "NullEventLogger",
    "sanitize_arguments",
    "utc_timestamp",
]
