"""
Metric backends.

MetricBackend is the capability interface the registry builder depends on;
PrometheusBackend and InMemoryBackend are the bundled implementations.
"""

from .base import MetricBackend, CounterHandle, GaugeHandle, HistogramHandle
from .memory import InMemoryBackend, InMemoryRegistry
from .prometheus import PrometheusBackend

__all__ = [
    'MetricBackend',
    'CounterHandle',
    'GaugeHandle',
    'HistogramHandle',
    'InMemoryBackend',
    'InMemoryRegistry',
    'PrometheusBackend'
]
