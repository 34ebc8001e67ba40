import gc
import time
from datetime import datetime, timedelta, timezone

import pytest

from meshkit.cache.base import Cache, ExpiringCache, Stats, duration_nanos, instant_nanos


class _Recorder(ExpiringCache):
    def __init__(self, default_expiration, eviction_interval):
        self.writes = []
        self.evictions = 0
        super().__init__(default_expiration, eviction_interval)

    def set_with_expiration(self, key, value, expiration):
        self.writes.append((key, value, expiration))

    def get(self, key, default=None):
        return default

    def remove(self, key):
        pass

    def remove_all(self):
        pass

    def stats(self):
        return Stats(writes=len(self.writes), evictions=self.evictions)

    def evict_expired(self, now=None):
        self.evictions += 1


def _wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_cache_is_abstract():
    with pytest.raises(TypeError):
        Cache()


def test_expiring_cache_is_abstract():
    with pytest.raises(TypeError):
        ExpiringCache(5, 0)


def test_set_uses_default_expiration():
    rec = _Recorder(7.5, 0)
    ExpiringCache.set(rec, "key", "value")
    assert rec.writes == [("key", "value", 7.5)]


def test_no_evicter_without_interval():
    rec = _Recorder(1, 0)
    ExpiringCache.set(rec, "k", "v")
    time.sleep(0.05)
    assert rec.evictions == 0
    assert rec.writes == [("k", "v", 1)]


def test_evicter_runs_and_stops_on_close():
    rec = _Recorder(1, 0.001)
    assert _wait_until(lambda: rec.evictions >= 2)
    ExpiringCache.close(rec)
    count = rec.evictions
    time.sleep(0.05)
    assert rec.evictions == count


def test_close_is_idempotent():
    rec = _Recorder(1, 0.001)
    ExpiringCache.close(rec)
    ExpiringCache.close(rec)
    count = rec.evictions
    time.sleep(0.02)
    assert rec.evictions == count


def test_context_manager_closes():
    with _Recorder(1, 0.001) as rec:
        ExpiringCache.set(rec, "a", 1)
        assert _wait_until(lambda: rec.evictions >= 1)
    assert rec.writes == [("a", 1, 1)]
    count = rec.evictions
    time.sleep(0.05)
    assert rec.evictions == count


def test_evicter_stops_when_collected():
    rec = _Recorder(1, 0.001)
    ExpiringCache.set(rec, "k", "v")
    assert rec.writes == [("k", "v", 1)]
    thread = rec._evicter_thread
    assert thread.is_alive()
    del rec
    gc.collect()
    thread.join(timeout=5)
    assert not thread.is_alive()


def test_duration_nanos_accepts_seconds_and_timedelta():
    assert duration_nanos(timedelta(milliseconds=20)) == duration_nanos(0.02)
    assert duration_nanos(timedelta(seconds=1)) == 1_000_000_000


def test_instant_nanos_accepts_datetime():
    moment = datetime(2001, 1, 1, tzinfo=timezone.utc)
    assert instant_nanos(moment) == instant_nanos(moment.timestamp())


def test_instant_nanos_defaults_to_now():
    before = time.time_ns()
    value = instant_nanos(None)
    after = time.time_ns()
    assert before <= value <= after