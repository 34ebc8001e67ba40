"""Attribute bags, in-memory caches, coverage counters, application signals and collateral helpers."""

__version__ = "0.1.0"