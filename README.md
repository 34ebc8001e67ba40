# meshkit

A small library of building blocks for service-mesh components:

- `meshkit.attribute` – typed attribute bags and the composite values they hold.
- `meshkit.cache` – thread-safe in-memory caches with LRU and time-based eviction.
- `meshkit.cover` – a registry of live code-coverage counters that writes
  coverage profiles.
- `meshkit.appsignals` – delivery of application signals from `SIGUSR1`,
  direct calls, or file changes to listener queues.
- `meshkit.collateral` – helpers for documentation collateral and a registry of
  exported metric descriptions.

## Installation

```
pip install meshkit
```

To run the tests:

```
pip install "meshkit[test]"
pytest
```

## Attribute bags

`meshkit.attribute.bag` defines the `Bag` interface (`get`, `names`,
`contains`, `done`, `reference_tracker`), the always-empty `EmptyBag`, and the
`Expression`, `ReferenceTracker`, `Reference`, `Presence` and
`ReferencedAttributeSnapshot` types. `check_type(value)` tells whether a value
may be stored in a bag: `bool`, `int`, `str`, `float`, `datetime`, `timedelta`,
`bytes`, `bytearray`, `StringMap` or `List`. `equal(this, that)` compares two
attribute values; values of different types are never equal.

`meshkit.attribute.values` holds the composite values: `List` (a named list
with `append` and `equal`) and `StringMap` (a named `str`-to-`str` map with
`set`, `get`, `entries`, `copy` and `equal`). `wrap_string_map(entries)`
wraps a plain dict. A `StringMap` with an owner bag reports each `get` to the
owner's reference tracker, if it has one.

`meshkit.attribute.mutable_bag.MutableBag` layers local values over a parent
bag: a fresh child looks like its parent, `set` and `delete` change only the
local layer, and `reset` drops it again.

```python
from meshkit.attribute.mutable_bag import MutableBag, copy_bag, mutable_bag_from
from meshkit.attribute.values import wrap_string_map

bag = mutable_bag_from({"request.size": 1024, "source.name": "frontend"})
bag.set("request.headers", wrap_string_map({"x-request-id": "abc"}))

bag.get("request.size")     # 1024
bag.get("missing")          # None
bag.names()                 # sorted names, including the parent's

child = MutableBag(bag)
child.set("source.name", "backend")
child.delete("source.name")  # the parent's value shows through again

snapshot = copy_bag(bag)     # deep copy, without a parent
bag.done()                   # the bag must not be used afterwards
```

- `set` and `mutable_bag_from` raise `TypeError` for values of unsupported types.
- Using a bag after `done` raises `BagDoneError`.
- `merge(other)` copies the other bag's local values for names this bag does not
  already hold.
- A `MutableBag` is also a context manager that calls `done` on exit.

## Caches

`meshkit.cache.base` defines `Stats` (`writes`, `hits`, `misses`, `evictions`,
`removals`) and the `Cache` and `ExpiringCache` interfaces. Two caches
implement them:

- `LRUCache(default_expiration, eviction_interval, max_entries)` holds at most
  `max_entries` entries. Getting or setting an entry makes it the most recently
  used; a new key in a full cache displaces the least recently used entry.
  `max_entries` below 1 raises `ValueError`.
- `TTLCache(default_expiration, eviction_interval, callback=None)` evicts only
  by time and calls `callback(key, value)` for every evicted entry. Its
  `remove` counts a removal even when the key was absent.

Durations are seconds (`int` or `float`) or `timedelta` values. Both caches offer
`set`, `set_with_expiration`, `get(key, default=None)`, `remove`, `remove_all`,
`stats`, `evict_expired(now=None)` and `close`, and support `len()`.

```python
from meshkit.cache.lru import LRUCache

with LRUCache(default_expiration=300, eviction_interval=1, max_entries=500) as cache:
    cache.set("foo", "bar")
    cache.get("foo")            # "bar"
    cache.get("nope", "dflt")   # "dflt"
    cache.stats()               # Stats(writes=1, hits=1, misses=1, ...)
```

When `eviction_interval` is positive, a background thread evicts expired
entries at that interval until `close` is called or the cache is garbage
collected. `get` does not check expiry; an expired entry stays until the next
eviction pass. `evict_expired(now)` accepts epoch seconds or a `datetime`, and
uses the current time by default.

## Coverage registry

`meshkit.cover.registry.Registry.register(length, context, read_pos, read_stmt,
read_count, clear_count)` registers a block of counters under a name. The read
functions return sequences of positions (three per counter), statement counts
and hit counts; `clear_count` resets the counters. Registering a name twice
raises `AlreadyRegisteredError`.

`snapshot()` captures the counters, `clear()` resets them, and
`get_coverage()` returns a `Coverage` of `Block` objects. The capture copies
the counters, so later changes appear only after the next `snapshot`.
`Coverage.write_profile(out)` writes a `mode: atomic` coverage profile to a
text stream, and `profile_text()` returns it as a string. `get_registry()`
returns the process-wide registry.

```python
from meshkit.cover.registry import Registry

counts = [10, 11]
registry = Registry()
registry.register(
    2, "foo.go",
    lambda: [20, 21, 22, 23, 24, 25],
    lambda: [30, 31],
    lambda: counts,
    lambda: counts.__setitem__(slice(None), [0, 0]),
)
registry.snapshot()
print(registry.get_coverage().profile_text())
```

## Application signals

```python
import queue
import signal
import threading

from meshkit import appsignals

events = queue.Queue(maxsize=5)
appsignals.watch(events)

appsignals.notify("hi", signal.SIGINT)
events.get()                       # Signal(source="hi", signal=SIGINT)

shutdown = threading.Event()
appsignals.file_trigger("/tmp/marker", signal.SIGUSR2, shutdown)
```

- `watch(listener)` adds a listener: anything with `put_nowait`, usually a
  `queue.Queue`. The first call, when made from the main thread on a platform
  with `SIGUSR1`, also turns `SIGUSR1` into a notification with source `"os"`.
- `notify(trigger, signum)` sends a `Signal(source, signal)` to every listener.
  A full listener queue misses the notification and a warning is logged.
- `file_trigger(path, signum, shutdown=None)` returns a `FileTrigger` that
  sends a notification, with the path as source, whenever the file (or a
  file in the directory) is created, modified, deleted or moved. It raises
  `FileNotFoundError` if the path does not exist. Watching ends on `stop()`,
  on leaving a `with` block, or once the `shutdown` event is set.

## Collateral helpers

`meshkit.collateral.control`:

- `dereference_map(mapping)` points every alias at the end of its alias chain.
- `build_nested_map(flat_map)` turns dotted keys into nested dicts, and raises
  `ValueError` when a key would descend through a name that holds a value.
- `normalize_id(identifier)` replaces spaces and dots with dashes.
- `unquote_usage(usage, type_name)` extracts a back-quoted placeholder from a
  flag's usage text, or guesses one from the value type.
- `emit_text(text)` renders blank-line separated text as escaped HTML paragraphs.

`meshkit.collateral.metrics`:

- `prom_name(metric_name)` converts a metric name to Prometheus style.
- `MetricsRegistry.export_view(name, aggregation_type, description)` records a
  metric as an `Exported` entry; the first view under a name wins.
- `exported_metrics()` returns the entries sorted by name.

```python
from meshkit.collateral.control import build_nested_map, dereference_map
from meshkit.collateral.metrics import MetricsRegistry, prom_name

dereference_map({"1": "2", "2": "3"})          # {"1": "3", "2": "3"}
build_nested_map({"a.b": "x", "c": "y"})       # {"a": {"b": "x"}, "c": "y"}
prom_name("/mixer/config/attributes_total")    # "mixer_config_attributes_total"

registry = MetricsRegistry()
registry.export_view("/mixer/config/attributes_total", "LastValue", "Known attributes.")
registry.exported_metrics()
```

## What it does not do

- There is no command-line tool. The collateral helpers are building blocks only:
  nothing here writes man pages, markdown trees, YAML docs, shell completion
  files or a full HTML reference for a command.
- `MetricsRegistry` knows only the metrics passed to `export_view`. It does not
  discover metrics from a running metrics library.
- The coverage registry does not serve its data over HTTP. Call `snapshot`,
  `clear` and `get_coverage` directly.
- No `ReferenceTracker` or `Expression` implementation is included; these are
  interfaces only, and `MutableBag.reference_tracker()` returns `None`.