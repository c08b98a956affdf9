"""Result cache for catalog lookups."""

import time
from collections.abc import MutableMapping
from typing import Any


class ResultCache:
    """Keyed cache for decoded catalog responses.

    Unbounded and non-expiring by default, so entries live as long as the
    owning engine. Pass ``max_size`` to evict oldest entries first and
    ``ttl`` (seconds) to expire entries. ``store`` swaps in any mutable
    mapping as the storage backend.

    Safe for single-threaded asyncio (no await between check and set).
    """

    def __init__(
        self,
        max_size: int | None = None,
        ttl: float | None = None,
        store: MutableMapping[str, tuple[float, Any]] | None = None,
    ):
        self._max_size = max_size or None
        self._ttl = ttl or None
        self._data: MutableMapping[str, tuple[float, Any]] = store if store is not None else {}

    def _is_expired(self, ts: float, now: float) -> bool:
        return self._ttl is not None and now - ts >= self._ttl

    def get(self, key: str) -> Any | None:
        """Get a cached value, or None if missing/expired."""
        entry = self._data.get(key)
        if entry is None:
            return None
        ts, value = entry
        if self._is_expired(ts, time.time()):
            del self._data[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        """Cache a value, evicting if over max_size."""
        self._data[key] = (time.time(), value)
        if self._max_size is not None and len(self._data) > self._max_size:
            self._evict()

    def _evict(self) -> None:
        """Drop expired entries, then oldest entries until within max_size."""
        now = time.time()
        expired = [k for k, (ts, _) in self._data.items() if self._is_expired(ts, now)]
        for k in expired:
            del self._data[k]
        overflow = len(self._data) - self._max_size
        if overflow > 0:
            oldest = sorted(self._data.keys(), key=lambda k: self._data[k][0])
            for k in oldest[:overflow]:
                del self._data[k]

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._data)
