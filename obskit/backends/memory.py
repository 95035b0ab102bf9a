"""
In-memory metric backend.

Needs no external metrics client. Handles are guarded by a lock so they can
be updated from several threads after the registry has been built.
"""

import math
import re
import threading
from dataclasses import dataclass, field
from typing import Sequence, Union

from .base import CounterHandle, GaugeHandle, HistogramHandle, MetricBackend

METRIC_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")


class InMemoryCounter(CounterHandle):

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def inc(self, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError("Counters can only be incremented by non-negative amounts.")
        with self._lock:
            self._value += amount

    def get(self) -> int:
        with self._lock:
            return self._value


class InMemoryGauge(GaugeHandle):

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def set(self, value: int) -> None:
        with self._lock:
            self._value = value

    def inc(self, amount: int = 1) -> None:
        with self._lock:
            self._value += amount

    def dec(self, amount: int = 1) -> None:
        with self._lock:
            self._value -= amount

    def get(self) -> int:
        with self._lock:
            return self._value


class InMemoryHistogram(HistogramHandle):

    def __init__(self, buckets: Sequence[float]):
        self._buckets = list(buckets)
        bounds = sorted(self._buckets)
        if not bounds or bounds[-1] != math.inf:
            bounds.append(math.inf)
        self._bounds = bounds
        self._counts = [0] * len(bounds)
        self._count = 0
        self._sum = 0.0
        self._lock = threading.Lock()

    @property
    def buckets(self) -> list[float]:
        return list(self._buckets)

    def observe(self, value: float) -> None:
        with self._lock:
            self._count += 1
            self._sum += value
            for i, bound in enumerate(self._bounds):
                if value <= bound:
                    self._counts[i] += 1

    def count(self) -> int:
        with self._lock:
            return self._count

    def sum(self) -> float:
        with self._lock:
            return self._sum

    def cumulative_buckets(self) -> list[tuple[float, int]]:
        with self._lock:
            return list(zip(self._bounds, self._counts))


InMemoryHandle = Union[InMemoryCounter, InMemoryGauge, InMemoryHistogram]


@dataclass
class RegisteredMetric:
    """One metric held by an InMemoryRegistry."""
    kind: str
    name: str
    description: str
    handle: InMemoryHandle


@dataclass
class InMemoryRegistry:
    """Registration-ordered collection of metrics."""
    metrics: list[RegisteredMetric] = field(default_factory=list)

    def register(self, kind: str, name: str, description: str, handle: InMemoryHandle) -> InMemoryHandle:
        if not METRIC_NAME_RE.match(name):
            raise ValueError(f"Invalid metric name: {name!r}")
        if any(m.kind == kind and m.name == name for m in self.metrics):
            raise ValueError(f"{kind} {name!r} is already registered")
        self.metrics.append(RegisteredMetric(kind, name, description, handle))
        return handle

    def __len__(self) -> int:
        return len(self.metrics)


def _format_value(value: float) -> str:
    if value == math.inf:
        return "+Inf"
    if isinstance(value, float) and value.is_integer():
        return repr(value)
    return str(value)


def _escape_help(text: str) -> str:
    return text.replace("\\", r"\\").replace("\n", r"\n")


class InMemoryBackend(MetricBackend):
    """MetricBackend that keeps metrics in process memory and renders Prometheus text format."""

    def __init__(self, registry: InMemoryRegistry | None = None):
        self._registry = registry if registry is not None else InMemoryRegistry()

    @property
    def registry(self) -> InMemoryRegistry:
        return self._registry

    def create_counter(self, title: str, description: str) -> InMemoryCounter:
        return self._registry.register("counter", title, description, InMemoryCounter())

    def create_gauge(self, title: str, description: str) -> InMemoryGauge:
        return self._registry.register("gauge", title, description, InMemoryGauge())

    def create_histogram(self, title: str, description: str, buckets: Sequence[float]) -> InMemoryHistogram:
        return self._registry.register("histogram", title, description, InMemoryHistogram(buckets))

    def render(self) -> str:
        lines = []
        for metric in self._registry.metrics:
            lines.append(f"# HELP {metric.name} {_escape_help(metric.description)}")
            lines.append(f"# TYPE {metric.name} {metric.kind}")
            if metric.kind == "counter":
                lines.append(f"{metric.name}_total {_format_value(metric.handle.get())}")
            elif metric.kind == "gauge":
                lines.append(f"{metric.name} {_format_value(metric.handle.get())}")
            else:
                for bound, count in metric.handle.cumulative_buckets():
                    lines.append(f'{metric.name}_bucket{{le="{_format_value(float(bound))}"}} {count}')
                lines.append(f"{metric.name}_count {metric.handle.count()}")
                lines.append(f"{metric.name}_sum {_format_value(metric.handle.sum())}")
        return "\n".join(lines) + "\n" if lines else ""
