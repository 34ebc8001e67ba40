"""Collection of exported metric descriptions for documentation."""

from __future__ import annotations

import threading
from dataclasses import dataclass

_NAME_REPLACEMENTS = str.maketrans({"/": "_", ".": "_", " ": "_", "-": None})


@dataclass(frozen=True)
class Exported:
    """Name, aggregation type and description of an exported metric."""

    name: str
    type: str
    description: str


def prom_name(metric_name: str) -> str:
    """Convert a metric view name to its Prometheus-style name."""
    if metric_name.startswith("/"):
        metric_name = metric_name[1:]
    return metric_name.translate(_NAME_REPLACEMENTS)


class MetricsRegistry:
    """Collects exported metric views; the first view under a name wins."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._metrics: dict[str, Exported] = {}

    def export_view(self, name: str, aggregation_type: str, description: str) -> None:
        """Record a metric view under its Prometheus-style name."""
        prom = prom_name(name)
        with self._lock:
            self._metrics.setdefault(prom, Exported(prom, aggregation_type, description))

    def exported_metrics(self) -> list[Exported]:
        """Return the recorded metrics sorted by name."""
        with self._lock:
            return [self._metrics[name] for name in sorted(self._metrics)]