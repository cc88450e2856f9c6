"""In-memory audit trail of recent projection runs."""
from __future__ import annotations

import threading
from collections import deque

from planner.config import settings
from planner.models.projection import AuditEntry


class AuditTrail:
    """Singleton holding the most recent projection runs, oldest first."""

    _instance: "AuditTrail | None" = None

    def __init__(self, max_entries: int | None = None) -> None:
        self._entries: deque[AuditEntry] = deque(maxlen=max_entries or settings.AUDIT_TRAIL_SIZE)
        self._lock = threading.Lock()

    @classmethod
    def get(cls) -> "AuditTrail":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset singleton, mainly for testing."""
        cls._instance = None

    def record(self, entry: AuditEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def entries(self) -> list[AuditEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
