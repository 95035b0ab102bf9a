"""
Metric definition types.

A configuration document deserializes into a RegistryConfig: an ordered list
of CounterDefinition, GaugeDefinition and HistogramDefinition values. The
types are independent of the document format.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from obskit.core.enums import ConfigFormat, MetricKind

# Upper bounds in seconds for request-latency style histograms
DEFAULT_LATENCY_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


@dataclass(frozen=True)
class CounterDefinition:
    """A monotonically increasing counter."""
    title: str
    description: str
    initial_value: int = 0

    kind = MetricKind.COUNTER


@dataclass(frozen=True)
class GaugeDefinition:
    """A gauge that may go up and down."""
    title: str
    description: str
    initial_value: int = 0

    kind = MetricKind.GAUGE


@dataclass(frozen=True)
class HistogramDefinition:
    """A histogram; buckets are consumed when the metric is created."""
    title: str
    description: str
    buckets: List[float] = field(default_factory=lambda: list(DEFAULT_LATENCY_BUCKETS))

    kind = MetricKind.HISTOGRAM


MetricDefinition = Union[CounterDefinition, GaugeDefinition, HistogramDefinition]

RegistryConfig = List[MetricDefinition]


@dataclass(frozen=True)
class ValidatedPath:
    """
    A canonical, absolute configuration file path tagged with its format.

    Only PathValidator produces these; the file parser accepts nothing else.
    """
    path: Path
    format: ConfigFormat

    def __str__(self) -> str:
        return str(self.path)
