"""An unbounded cache whose entries are evicted only by time."""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Any, Callable, Hashable

from meshkit.cache.base import Duration, ExpiringCache, Instant, Stats

EvictionCallback = Callable[[Any, Any], None]


class TTLCache(ExpiringCache):
    """A cache whose entries are evicted once their expiration time has passed.

    Entries survive roughly their expiration plus half the eviction interval.
    The optional callback is called with (key, value) for every evicted
    entry, with no lock held. Nothing bounds the number of entries.
    """

    def __init__(
        self,
        default_expiration: Duration,
        eviction_interval: Duration,
        callback: EvictionCallback | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._entries: dict[Hashable, tuple[Any, int]] = {}
        self._stats = Stats()
        self._callback = callback
        super().__init__(default_expiration, eviction_interval)

    def set(self, key: Hashable, value: Any) -> None:
        self.set_with_expiration(key, value, self.default_expiration)

    def set_with_expiration(self, key: Hashable, value: Any, expiration: Duration) -> None:
        expires = self._expiry(expiration)
        with self._lock:
            self._entries[key] = (value, expires)
            self._stats.writes += 1

    def get(self, key: Hashable, default: Any = None) -> Any:
        # Expiry is not checked here; entries live until the next eviction pass.
        with self._lock:
            try:
                value, _ = self._entries[key]
            except KeyError:
                self._stats.misses += 1
                return default
            self._stats.hits += 1
            return value

    def remove(self, key: Hashable) -> None:
        """Delete the entry for key; counted as a removal even if it was absent."""
        with self._lock:
            self._entries.pop(key, None)
            self._stats.removals += 1

    def remove_all(self) -> None:
        with self._lock:
            self._stats.removals += len(self._entries)
            self._entries.clear()

    def stats(self) -> Stats:
        with self._lock:
            return replace(self._stats)

    def evict_expired(self, now: Instant = None) -> None:
        nanos = self._advance_base(now)
        with self._lock:
            expired = [
                (key, value) for key, (value, expires) in self._entries.items() if expires <= nanos
            ]
            for key, _ in expired:
                del self._entries[key]
            self._stats.evictions += len(expired)
        if self._callback is not None:
            for key, value in expired:
                self._callback(key, value)

    def close(self) -> None:
        """Stop the background evicter, if one is running."""
        super().close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)