"""
momentum.services.log_buffer — Recent Log Tail
===============================================

A bounded, thread-safe buffer of recent log records, fed by a
:class:`logging.Handler` installed on the root logger at API startup.
``GET /api/logs`` reads it so operators can see what the service has been
doing without shell access.  Nothing is persisted.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

DEFAULT_CAPACITY = 1000
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_buffer: LogBuffer | None = None
_lock = threading.Lock()


@dataclass(frozen=True, slots=True)
class LogEntry:
    timestamp: str
    level: str
    logger: str
    message: str


class LogBuffer:
    """Keeps the newest *capacity* entries; older ones fall off the front."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def append(self, entry: LogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def tail(
        self,
        count: int = 100,
        min_level: str | None = None,
        logger_prefix: str | None = None,
    ) -> list[dict[str, str]]:
        """Newest *count* entries at or above *min_level* whose logger name
        starts with *logger_prefix*, oldest first."""
        if min_level is not None and min_level.upper() not in VALID_LEVELS:
            raise ValueError(f"Invalid level: {min_level}. Must be one of {VALID_LEVELS}")
        threshold = logging.getLevelName(min_level.upper()) if min_level else logging.NOTSET

        with self._lock:
            snapshot = list(self._entries)

        matched = [
            asdict(e) for e in snapshot
            if logging.getLevelName(e.level) >= threshold
            and (not logger_prefix or e.logger.startswith(logger_prefix))
        ]
        return matched[-count:] if count > 0 else []

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class BufferHandler(logging.Handler):
    """Copies each record into a :class:`LogBuffer`."""

    def __init__(self, buffer: LogBuffer, level: int = logging.INFO) -> None:
        super().__init__(level)
        self.buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.buffer.append(LogEntry(
                timestamp=datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                level=record.levelname,
                logger=record.name,
                message=record.getMessage(),
            ))
        except Exception:
            self.handleError(record)


def get_buffer() -> LogBuffer:
    """Return (or create) the process-wide buffer."""
    global _buffer
    if _buffer is None:
        with _lock:
            if _buffer is None:
                _buffer = LogBuffer()
    return _buffer


def install_handler(level: int = logging.INFO) -> BufferHandler:
    """Attach a :class:`BufferHandler` to the root logger (once).

    Uvicorn's own loggers are switched to propagate so request logs land in
    the buffer too.
    """
    root = logging.getLogger()
    for existing in root.handlers:
        if isinstance(existing, BufferHandler):
            return existing

    handler = BufferHandler(get_buffer(), level=level)
    root.addHandler(handler)
    if root.level > level or root.level == logging.NOTSET:
        root.setLevel(level)
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).propagate = True
    return handler
