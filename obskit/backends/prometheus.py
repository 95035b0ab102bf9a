"""
Prometheus backend built on prometheus_client.

Each backend instance owns a private CollectorRegistry, so building two
registries from the same document never collides in the process-wide
default registry.
"""

from typing import Sequence

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

from .base import CounterHandle, GaugeHandle, HistogramHandle, MetricBackend


def _sample_value(metric, suffix: str = "") -> float:
    for family in metric.collect():
        wanted = family.name + suffix
        for sample in family.samples:
            if sample.name == wanted and not sample.labels:
                return sample.value
    return 0.0


class PrometheusCounter(CounterHandle):

    def __init__(self, counter: Counter):
        self.metric = counter

    def inc(self, amount: int = 1) -> None:
        self.metric.inc(amount)

    def get(self) -> float:
        return _sample_value(self.metric, "_total")


class PrometheusGauge(GaugeHandle):

    def __init__(self, gauge: Gauge):
        self.metric = gauge

    def set(self, value: int) -> None:
        self.metric.set(value)

    def inc(self, amount: int = 1) -> None:
        self.metric.inc(amount)

    def dec(self, amount: int = 1) -> None:
        self.metric.dec(amount)

    def get(self) -> float:
        return _sample_value(self.metric)


class PrometheusHistogram(HistogramHandle):

    def __init__(self, histogram: Histogram, buckets: Sequence[float]):
        self.metric = histogram
        self._buckets = list(buckets)

    @property
    def buckets(self) -> list[float]:
        return list(self._buckets)

    def observe(self, value: float) -> None:
        self.metric.observe(value)

    def count(self) -> int:
        return int(_sample_value(self.metric, "_count"))

    def sum(self) -> float:
        return _sample_value(self.metric, "_sum")


class PrometheusBackend(MetricBackend):
    """
    MetricBackend backed by a prometheus_client CollectorRegistry.

    prometheus_client rejects invalid metric names, unsorted buckets and any
    time series name already present in the registry. The last point means a
    counter and a gauge sharing a title collide here even though the registry
    builder itself allows it, and the build fails with BackendRegistrationError.

    When choosing titles for this backend, keep them unique across all metric
    types, and avoid titles that differ only by a ``_total``, ``_count``,
    ``_sum`` or ``_bucket`` suffix.
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        self._registry = registry if registry is not None else CollectorRegistry()

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def create_counter(self, title: str, description: str) -> PrometheusCounter:
        return PrometheusCounter(Counter(title, description, registry=self._registry))

    def create_gauge(self, title: str, description: str) -> PrometheusGauge:
        return PrometheusGauge(Gauge(title, description, registry=self._registry))

    def create_histogram(self, title: str, description: str, buckets: Sequence[float]) -> PrometheusHistogram:
        histogram = Histogram(title, description, buckets=list(buckets), registry=self._registry)
        return PrometheusHistogram(histogram, buckets)

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")
