"""Logging service.

Captures recent log records into a ring buffer so the demo window status
line and tests can inspect animator lifecycle events (start, settle, lost subject) without
parsing stderr. ``configure_logging`` installs the stream handler used by
``python -m typebounce``.

Design goals:
 - Headless testability (no Qt dependency here)
 - Filtering by level name or logger name substring
 - Capacity-bound ring buffer with O(1) append
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, List, Optional, Union

from typebounce.config import settings

__all__ = [
    "LogEntry",
    "LoggingService",
    "configure_logging",
]

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = 500, logger_name: str = "typebounce") -> None:
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._logger_name = logger_name
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._attached = False
        self._previous_level: Optional[int] = None

    # Lifecycle --------------------------------------------------------
    def attach_root(self) -> None:
        """Attach to the package logger, lowering its level to DEBUG if needed."""
        if self._attached:
            return
        target = logging.getLogger(self._logger_name)
        target.addHandler(self._handler)
        self._previous_level = target.level
        if target.level == logging.NOTSET or target.level > logging.DEBUG:
            target.setLevel(logging.DEBUG)
        self._attached = True

    def detach_root(self) -> None:
        if not self._attached:
            return
        target = logging.getLogger(self._logger_name)
        target.removeHandler(self._handler)
        if self._previous_level is not None:
            target.setLevel(self._previous_level)
        self._attached = False

    def __enter__(self) -> "LoggingService":
        self.attach_root()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.detach_root()

    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def latest_message(self, *, name_contains: str | None = None) -> Optional[str]:
        """Return the newest captured message (optionally filtered by logger name)."""
        entries = self.filter(name_contains=name_contains)
        return entries[-1].message if entries else None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def configure_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """Install a stderr handler on the ``typebounce`` logger (idempotent)."""
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")
    log = logging.getLogger("typebounce")
    log.setLevel(level)
    streams = [h for h in log.handlers if getattr(h, "_typebounce_stream", False)]
    if not streams:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._typebounce_stream = True  # type: ignore[attr-defined]
        log.addHandler(handler)
        streams = [handler]
    # the stream keeps this level even if a LoggingService lowers the logger
    for h in streams:
        h.setLevel(level)
    return log
