"""Metrics client abstraction and implementations.

This module provides:
- MetricsClient: Abstract base class for metrics emission
- NullMetricsClient: No-op implementation (default)
- StdoutMetricsClient: JSON lines on stderr for debugging
- InMemoryMetricsClient: Keeps every value in process, for tests and ad-hoc inspection

The backend is chosen by the METRICS_BACKEND environment variable unless a
client is installed explicitly with set_metrics_client().
"""

from __future__ import annotations

import json
import os
import sys
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any


class MetricsClient(ABC):
    """Sink for census counters, observations and timings."""

    @abstractmethod
    def incr(self, name: str, tags: dict[str, str] | None = None, value: int = 1) -> None:
        """Increment a counter metric."""
        ...

    @abstractmethod
    def observe(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        """Record a point value such as a section count."""
        ...

    @abstractmethod
    def timing(self, name: str, value_ms: float, tags: dict[str, str] | None = None) -> None:
        """Record a timing value in milliseconds."""
        ...


class StdoutMetricsClient(MetricsClient):
    def __init__(self, prefix: str = "signout"):
        self.prefix = prefix

    def _emit(self, metric_type: str, name: str, value: Any, tags: dict[str, str] | None) -> None:
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "type": metric_type,
            "metric": f"{self.prefix}.{name}",
            "value": value,
            "tags": tags or {},
        }
        print(json.dumps(record), file=sys.stderr)

    def incr(self, name: str, tags: dict[str, str] | None = None, value: int = 1) -> None:
        self._emit("counter", name, value, tags)

    def observe(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self._emit("gauge", name, value, tags)

    def timing(self, name: str, value_ms: float, tags: dict[str, str] | None = None) -> None:
        self._emit("timing", name, value_ms, tags)


class NullMetricsClient(MetricsClient):
    """No-op metrics client for when metrics are disabled."""

    def incr(self, name: str, tags: dict[str, str] | None = None, value: int = 1) -> None:
        pass

    def observe(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        pass

    def timing(self, name: str, value_ms: float, tags: dict[str, str] | None = None) -> None:
        pass


class InMemoryMetricsClient(MetricsClient):
    """Thread-safe store of counters, observations and timings keyed by metric name."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.counters: dict[str, int] = defaultdict(int)
        self.observations: dict[str, list[float]] = defaultdict(list)
        self.timings: dict[str, list[float]] = defaultdict(list)

    def incr(self, name: str, tags: dict[str, str] | None = None, value: int = 1) -> None:
        with self._lock:
            self.counters[name] += value

    def observe(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        with self._lock:
            self.observations[name].append(value)

    def timing(self, name: str, value_ms: float, tags: dict[str, str] | None = None) -> None:
        with self._lock:
            self.timings[name].append(value_ms)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self.counters),
                "observations": {k: list(v) for k, v in self.observations.items()},
                "timings": {k: list(v) for k, v in self.timings.items()},
            }

    def reset(self) -> None:
        with self._lock:
            self.counters.clear()
            self.observations.clear()
            self.timings.clear()


# Global singleton
_metrics_client: MetricsClient | None = None

_BACKENDS: dict[str, type[MetricsClient]] = {
    "memory": InMemoryMetricsClient,
    "stdout": StdoutMetricsClient,
    "null": NullMetricsClient,
}


def get_metrics_client() -> MetricsClient:
    """Return the process-wide client, creating it from METRICS_BACKEND on first use.

    Unknown or unset backends fall back to NullMetricsClient.
    """
    global _metrics_client
    if _metrics_client is None:
        backend = os.getenv("METRICS_BACKEND", "null").strip().lower()
        _metrics_client = _BACKENDS.get(backend, NullMetricsClient)()
    return _metrics_client


def set_metrics_client(client: MetricsClient) -> None:
    global _metrics_client
    _metrics_client = client


def reset_metrics_client() -> None:
    """Drop the global client; the next get_metrics_client() re-reads the environment."""
    global _metrics_client
    _metrics_client = None
