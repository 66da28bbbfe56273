"""
In-memory TTL cache for enriched catalog payloads.
"""

import json
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from shared.logging import get_logger


DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload and the clock reading at insertion."""

    key: str
    data: Any
    inserted_at: float


class CacheStore:
    """Thread-safe key/value store whose entries expire after a fixed TTL.

    Expiry is logical: an entry older than the TTL is never returned and is
    evicted the next time its key is read. The store has no size bound.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self.logger = get_logger("gateway.cache_store")

    def get(self, key: str) -> Optional[Any]:
        """Return the payload for ``key`` or None when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not self._is_fresh(entry, self._clock()):
                del self._entries[key]
                self.logger.debug("Evicted expired cache entry", key=key)
                return None
            return entry.data

    def put(self, key: str, data: Any) -> None:
        """Insert or overwrite ``key``, restarting its TTL."""
        entry = CacheEntry(key=key, data=data, inserted_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries = {}
        self.logger.info("Cache cleared", cleared_entries=removed)
        return removed

    def stats(self) -> Dict[str, Any]:
        """Snapshot of servable entries with their age and serialized size."""
        with self._lock:
            now = self._clock()
            live = [entry for entry in self._entries.values() if self._is_fresh(entry, now)]

        entries: List[Dict[str, Any]] = [
            {
                "key": entry.key,
                "ageMs": int((now - entry.inserted_at) * 1000),
                "approxByteSize": self._approx_size(entry.data),
            }
            for entry in live
        ]
        return {"size": len(entries), "entries": entries}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.inserted_at < self.ttl_seconds

    @staticmethod
    def _approx_size(data: Any) -> int:
        return len(json.dumps(data, ensure_ascii=False, default=str).encode("utf-8"))
