"""A bounded cache with least-recently-used replacement and time-based expiry."""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import replace
from typing import Any, Hashable

from meshkit.cache.base import Duration, ExpiringCache, Instant, Stats


class LRUCache(ExpiringCache):
    """A cache holding at most max_entries entries.

    Getting or setting an entry makes it the most recently used; when the
    cache is full, setting a new key displaces the least recently used one.
    Entries also expire after their expiration time, evicted by
    evict_expired() or the background evicter when eviction_interval > 0.
    """

    def __init__(
        self,
        default_expiration: Duration,
        eviction_interval: Duration,
        max_entries: int,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._lock = threading.Lock()
        # Ordered from least to most recently used; values are (value, expiration_ns).
        self._entries: OrderedDict[Hashable, tuple[Any, int]] = OrderedDict()
        self._max_entries = max_entries
        self._stats = Stats()
        super().__init__(default_expiration, eviction_interval)

    def set(self, key: Hashable, value: Any) -> None:
        self.set_with_expiration(key, value, self.default_expiration)

    def set_with_expiration(self, key: Hashable, value: Any, expiration: Duration) -> None:
        expires = self._expiry(expiration)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
            elif len(self._entries) >= self._max_entries:
                self._entries.popitem(last=False)
            self._entries[key] = (value, expires)
            self._stats.writes += 1

    def get(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            try:
                value, _ = self._entries[key]
            except KeyError:
                self._stats.misses += 1
                return default
            self._entries.move_to_end(key)
            self._stats.hits += 1
            return value

    def remove(self, key: Hashable) -> None:
        with self._lock:
            if self._entries.pop(key, None) is not None:
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
            expired = [key for key, (_, expires) in self._entries.items() if expires <= nanos]
            for key in expired:
                del self._entries[key]
            self._stats.evictions += len(expired)

    def close(self) -> None:
        """Stop the background evicter, if one is running."""
        super().close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)