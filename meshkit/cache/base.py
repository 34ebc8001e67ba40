"""Cache statistics and the interfaces shared by the in-memory caches."""

from __future__ import annotations

import threading
import time
import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Hashable, Optional, Union

Duration = Union[int, float, timedelta]
Instant = Union[int, float, datetime, None]

_NANOS_PER_SECOND = 1_000_000_000


@dataclass
class Stats:
    """Approximate usage counters of a cache."""

    writes: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    removals: int = 0


def duration_nanos(duration: Duration) -> int:
    """Convert a duration in seconds, or a timedelta, to nanoseconds."""
    if isinstance(duration, timedelta):
        return (duration // timedelta(microseconds=1)) * 1000
    return int(round(duration * _NANOS_PER_SECOND))


def instant_nanos(now: Instant) -> int:
    """Convert a point in time (epoch seconds or datetime) to epoch nanoseconds."""
    if now is None:
        return time.time_ns()
    if isinstance(now, datetime):
        return int(round(now.timestamp() * _NANOS_PER_SECOND))
    return int(round(now * _NANOS_PER_SECOND))


def _run_evicter(
    cache_ref: Callable[[], Optional["ExpiringCache"]],
    stop: threading.Event,
    interval: float,
) -> None:
    # Only a weak reference is held so that an unused cache can be collected.
    while not stop.wait(interval):
        cache = cache_ref()
        if cache is None:
            return
        cache.evict_expired()
        del cache


class Cache(ABC):
    """A thread-safe in-memory cache."""

    @abstractmethod
    def set(self, key: Hashable, value: Any) -> None:
        """Insert or replace an entry."""

    @abstractmethod
    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the cached value for key, or default if it is not present."""

    @abstractmethod
    def remove(self, key: Hashable) -> None:
        """Delete the entry for key, if any."""

    @abstractmethod
    def remove_all(self) -> None:
        """Delete every entry."""

    @abstractmethod
    def stats(self) -> Stats:
        """Return a snapshot of the usage counters."""


class ExpiringCache(Cache):
    """A cache whose entries expire after a time.

    When eviction_interval is positive a background thread evicts expired
    entries at that interval. It stops on close(), or once the cache is
    garbage collected. Subclasses must set up their own state before
    calling this initializer, since eviction may start right away.
    """

    def __init__(self, default_expiration: Duration, eviction_interval: Duration) -> None:
        self.default_expiration = default_expiration
        self._base_nanos = time.time_ns()
        self._stop = threading.Event()
        self._evicter_thread: threading.Thread | None = None

        interval_ns = duration_nanos(eviction_interval)
        if interval_ns > 0:
            self._evicter_thread = threading.Thread(
                target=_run_evicter,
                args=(weakref.ref(self), self._stop, interval_ns / _NANOS_PER_SECOND),
                name=f"{type(self).__name__}-evicter",
                daemon=True,
            )
            weakref.finalize(self, self._stop.set)
            self._evicter_thread.start()

    def set(self, key: Hashable, value: Any) -> None:
        """Insert or replace an entry with the default expiration."""
        self.set_with_expiration(key, value, self.default_expiration)

    @abstractmethod
    def set_with_expiration(self, key: Hashable, value: Any, expiration: Duration) -> None:
        """Insert or replace an entry that expires after the given duration."""

    @abstractmethod
    def evict_expired(self, now: Instant = None) -> None:
        """Evict every entry that has expired at now (default: the current time)."""

    def close(self) -> None:
        """Stop the background evicter, if one is running."""
        self._stop.set()
        thread = self._evicter_thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _expiry(self, expiration: Duration) -> int:
        return self._base_nanos + duration_nanos(expiration)

    def _advance_base(self, now: Instant) -> int:
        # The base time is only sampled on eviction, which keeps set() cheap.
        nanos = instant_nanos(now)
        self._base_nanos = nanos
        return nanos

    def __enter__(self) -> "ExpiringCache":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()