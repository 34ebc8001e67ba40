"""Thread-safe in-memory caches with LRU and time-based eviction."""