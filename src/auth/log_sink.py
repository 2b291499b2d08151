"""
Authentication Event Log Sinks

The pipeline writes one ``LogRecord`` per transition through a ``LogSink``.
Sinks mirror every record to the ``auth.events`` logger as a JSON line;
the file sink additionally appends a human-readable line to disk.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import orjson

from core.logger import EVENT_LOGGER, get_logger

event_logger = get_logger(EVENT_LOGGER)

_LEVELS = {
    "debug": 10,
    "info": 20,
    "warn": 30,
    "warning": 30,
    "error": 40,
}


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class LogRecord:
    """A single authentication event."""
    level: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "level": self.level,
            "message": self.message,
            **self.data,
        }

    def to_line(self) -> str:
        """Format as ``[timestamp] [LEVEL] message {json}``."""
        blob = orjson.dumps(self.data, default=str).decode("utf-8")
        return f"[{self.timestamp}] [{self.level.upper()}] {self.message} {blob}\n"


class LogSink(ABC):
    """Append-only destination for authentication events."""

    def write(self, record: LogRecord) -> None:
        level = _LEVELS.get(record.level.lower(), 20)
        event_logger.log(level, orjson.dumps(record.to_dict(), default=str).decode("utf-8"))
        self._append(record)

    @abstractmethod
    def _append(self, record: LogRecord) -> None:
        """Persist a single record atomically."""
        pass


class FileLogSink(LogSink):
    """Appends one line per record to a text file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def start(self) -> None:
        """Truncate the file and write the startup banner."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            with self.path.open("w", encoding="utf-8") as f:
                f.write(f"=== Server started at {utc_now_iso()} ===\n")

    def _append(self, record: LogRecord) -> None:
        line = record.to_line()
        with self._lock:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line)


class MemoryLogSink(LogSink):
    """Keeps records in memory. Used by tests and local tooling."""

    def __init__(self):
        self.records: List[LogRecord] = []
        self._lock = threading.Lock()

    def _append(self, record: LogRecord) -> None:
        with self._lock:
            self.records.append(record)

    def messages(self, level: Optional[str] = None) -> List[str]:
        with self._lock:
            return [r.message for r in self.records if level is None or r.level == level]

    def clear(self) -> None:
        with self._lock:
            self.records.clear()
