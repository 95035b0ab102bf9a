"""
Metric backend capability interface.

A backend owns the underlying metrics registry and knows how to create
counters, gauges and histograms in it and render it. The registry builder
only talks to this interface, so any metrics client (or a test double) can
be plugged in.
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence


class CounterHandle(ABC):
    """Monotonic counter handle returned by a backend."""

    @abstractmethod
    def inc(self, amount: int = 1) -> None:
        """Increase the counter by ``amount``."""
        pass

    @abstractmethod
    def get(self) -> float:
        """Current counter value."""
        pass


class GaugeHandle(ABC):
    """Gauge handle returned by a backend."""

    @abstractmethod
    def set(self, value: int) -> None:
        pass

    @abstractmethod
    def inc(self, amount: int = 1) -> None:
        pass

    @abstractmethod
    def dec(self, amount: int = 1) -> None:
        pass

    @abstractmethod
    def get(self) -> float:
        pass


class HistogramHandle(ABC):
    """Histogram handle returned by a backend."""

    @property
    @abstractmethod
    def buckets(self) -> list[float]:
        """Bucket upper bounds exactly as they were supplied at creation."""
        pass

    @abstractmethod
    def observe(self, value: float) -> None:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def sum(self) -> float:
        pass


class MetricBackend(ABC):
    """
    Abstract base class for metric backends.

    Creation methods may raise any exception to reject a name or description;
    the registry builder wraps it in a BackendRegistrationError.
    """

    @property
    @abstractmethod
    def registry(self) -> Any:
        """The backend-defined registry metrics are registered into."""
        pass

    @abstractmethod
    def create_counter(self, title: str, description: str) -> CounterHandle:
        pass

    @abstractmethod
    def create_gauge(self, title: str, description: str) -> GaugeHandle:
        pass

    @abstractmethod
    def create_histogram(self, title: str, description: str, buckets: Sequence[float]) -> HistogramHandle:
        pass

    @abstractmethod
    def render(self) -> str:
        """Render the registry in the backend's exposition format."""
        pass
