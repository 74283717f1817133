"""
In-process metrics for provider calls and aggregate requests.

Names in use:
    provider_calls.{provider}       counter
    provider_failures.{provider}    counter
    provider_latency_ms.{provider}  timing
    aggregate_requests              counter
    aggregate_latency_ms            timing
"""

import threading
import time
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

PROVIDER_CALLS = "provider_calls"
PROVIDER_FAILURES = "provider_failures"
PROVIDER_LATENCY = "provider_latency_ms"


@dataclass
class TimingStats:
    """Running count, sum and extremes of a latency series in milliseconds."""

    count: int = 0
    total_ms: float = 0.0
    min_ms: float = 0.0
    max_ms: float = 0.0

    @property
    def avg_ms(self) -> float:
        return self.total_ms / self.count if self.count else 0.0

    def record(self, duration_ms: float) -> None:
        self.min_ms = duration_ms if self.count == 0 else min(self.min_ms, duration_ms)
        self.max_ms = max(self.max_ms, duration_ms)
        self.total_ms += duration_ms
        self.count += 1

    def copy(self) -> "TimingStats":
        return TimingStats(self.count, self.total_ms, self.min_ms, self.max_ms)

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "avg_ms": round(self.avg_ms, 2),
            "min_ms": round(self.min_ms, 2),
            "max_ms": round(self.max_ms, 2),
        }


@dataclass(frozen=True)
class ProviderStats:
    """Per-provider view over the raw counters and timings."""

    provider: str
    calls: int
    failures: int
    latency: TimingStats


class Metrics:
    """
    Thread-safe counters and timings shared by the whole process.

    Example:
        >>> metrics = Metrics.get()
        >>> with metrics.timer("aggregate_latency_ms"):
        ...     response = await aggregator.aggregate("Mars")
        >>> metrics.get_counter("provider_calls.news")
        1
    """

    _instance: "Metrics | None" = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: Counter[str] = Counter()
        self._timings: dict[str, TimingStats] = {}

    @classmethod
    def get(cls) -> "Metrics":
        """The process-wide collector."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop everything recorded so far."""
        with cls._instance_lock:
            cls._instance = None

    def increment(self, name: str, value: int = 1) -> int:
        with self._lock:
            self._counters[name] += value
            return self._counters[name]

    def get_counter(self, name: str) -> int:
        with self._lock:
            return self._counters[name]

    def observe(self, name: str, duration_ms: float) -> None:
        with self._lock:
            self._timings.setdefault(name, TimingStats()).record(duration_ms)

    def get_timing(self, name: str) -> TimingStats | None:
        with self._lock:
            stats = self._timings.get(name)
            return stats.copy() if stats else None

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        """Record the wall time of the block under `name`, even if it raises."""
        started = time.perf_counter()
        try:
            yield
        finally:
            self.observe(name, (time.perf_counter() - started) * 1000)

    def provider_stats(self) -> list[ProviderStats]:
        """Calls, failures and latency for every provider seen, by name."""
        with self._lock:
            names = {
                name.split(".", 1)[1]
                for name in (*self._counters, *self._timings)
                if name.startswith(f"{PROVIDER_CALLS}.") or name.startswith(f"{PROVIDER_LATENCY}.")
            }
            return [
                ProviderStats(
                    provider=name,
                    calls=self._counters[f"{PROVIDER_CALLS}.{name}"],
                    failures=self._counters[f"{PROVIDER_FAILURES}.{name}"],
                    latency=self._timings.get(f"{PROVIDER_LATENCY}.{name}", TimingStats()).copy(),
                )
                for name in sorted(names)
            ]

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "counters": {name: value for name, value in self._counters.items() if value},
                "timings": {name: stats.to_dict() for name, stats in self._timings.items()},
            }

    def summary(self) -> str:
        """Plain-text dump of every counter and timing."""
        snap = self.snapshot()
        lines = ["Metrics Summary"]
        for name, value in sorted(snap["counters"].items()):
            lines.append(f"  {name}: {value}")
        for name, stats in sorted(snap["timings"].items()):
            lines.append(
                f"  {name}: n={stats['count']} avg={stats['avg_ms']:.1f}ms "
                f"max={stats['max_ms']:.1f}ms"
            )
        return "\n".join(lines)


def increment_provider_calls(provider: str) -> None:
    Metrics.get().increment(f"{PROVIDER_CALLS}.{provider}")


def increment_provider_failures(provider: str) -> None:
    Metrics.get().increment(f"{PROVIDER_FAILURES}.{provider}")


@contextmanager
def time_provider_call(provider: str) -> Iterator[None]:
    """Count one call to `provider` and time it."""
    increment_provider_calls(provider)
    with Metrics.get().timer(f"{PROVIDER_LATENCY}.{provider}"):
        yield


@contextmanager
def time_aggregate() -> Iterator[None]:
    """Count one aggregate request and time it."""
    metrics = Metrics.get()
    metrics.increment("aggregate_requests")
    with metrics.timer("aggregate_latency_ms"):
        yield
