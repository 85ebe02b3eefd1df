"""Structured JSONL event log for command runs."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol, TextIO


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Sanitized representation of one step of a command run."""

    timestamp: str
    event: str
    ok: bool
    metadata: dict[str, object]


class EventLogger(Protocol):
    def emit(self, event: str, metadata: dict[str, object], ok: bool = True) -> None: ...


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sanitize_arguments(arguments: dict[str, object]) -> dict[str, object]:
    """Keep ids, actions and counts; reduce free text to presence and length."""
    sanitized: dict[str, object] = {}
    for key in sorted(arguments.keys()):
        value = arguments[key]
        if key in {"id", "action", "command", "verdict", "program", "path"} and isinstance(
            value, str
        ):
            sanitized[key] = value
            continue
        if isinstance(value, (int, float, bool)) or value is None:
            sanitized[key] = value
            continue
        if isinstance(value, str):
            sanitized[f"{key}_present"] = True
            sanitized[f"{key}_length"] = len(value)
            continue
        if isinstance(value, (list, tuple)):
            sanitized[f"{key}_type"] = "list"
            sanitized[f"{key}_length"] = len(value)
            continue
        sanitized[f"{key}_type"] = type(value).__name__
    return sanitized


class NullEventLogger:
    """Logger used when neither verbose output nor a log file is configured."""

    def emit(self, event: str, metadata: dict[str, object], ok: bool = True) -> None:
        return None


class JsonlEventLogger:
    """Write one JSON object per event to a stream and/or an append-only file."""

    def __init__(self, stream: TextIO | None = None, path: Path | None = None) -> None:
        self._stream = stream
        self._path = path
        if self._path is not None:
            self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path | None:
        """Return on-disk JSONL path, if any."""
        return self._path

    def emit(self, event: str, metadata: dict[str, object], ok: bool = True) -> None:
        """Record a sanitized event."""
        record = LogEvent(
            timestamp=utc_timestamp(),
            event=event,
            ok=ok,
            metadata=sanitize_arguments(metadata),
        )
        line = json.dumps(asdict(record), sort_keys=True)
        if self._stream is not None:
            self._stream.write(f"{line}\n")
            self._stream.flush()
        if self._path is not None:
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(line)
                handle.write("\n")
