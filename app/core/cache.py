"""Small in-process TTL cache for profile lookups."""

import time
from typing import Any, Callable


class TTLCache:
    """Time-bounded key/value cache.

    Entries expire ``ttl_seconds`` after they were stored. There is no
    invalidation besides expiry and ``invalidate``; concurrent misses on the
    same key both fetch.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Any | None:
        """Get cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, stored_at = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (value, self._clock())

    def invalidate(self, key: str) -> None:
        """Drop a single key."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
