"""
Registry builder: turns a RegistryConfig into metrics registered with a backend.

Registration is a single ordered pass. The first duplicate title within a
metric type, or the first backend failure, aborts the build; definitions
registered before that point stay in the backend's registry. Callers that
need all-or-nothing behaviour discard the backend and start with a fresh one.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, TypeVar

from obskit.backends.base import CounterHandle, GaugeHandle, HistogramHandle, MetricBackend
from obskit.core.enums import MetricKind
from obskit.core.exceptions import BackendRegistrationError, DuplicateMetricNameError
from obskit.deserialise.definitions import (
    CounterDefinition,
    GaugeDefinition,
    HistogramDefinition,
    MetricDefinition,
    RegistryConfig,
)
from obskit.logger import get_obskit_logger

H = TypeVar('H')


@dataclass
class ConfiguredRegistry:
    """
    A backend registry plus name-indexed access to every metric created in it.

    The three mappings are independent keyspaces: the same title may appear
    as a counter, a gauge and a histogram at once.
    """
    registry: Any
    backend: MetricBackend = field(repr=False)
    counters: Dict[str, CounterHandle] = field(default_factory=dict)
    gauges: Dict[str, GaugeHandle] = field(default_factory=dict)
    histograms: Dict[str, HistogramHandle] = field(default_factory=dict)

    def render(self) -> str:
        """Render the underlying registry through its backend."""
        return self.backend.render()

    def __len__(self) -> int:
        return len(self.counters) + len(self.gauges) + len(self.histograms)

    @classmethod
    def from_config(cls, config: RegistryConfig, backend: MetricBackend) -> "ConfiguredRegistry":
        return RegistryBuilder().build(config, backend)

    @staticmethod
    def from_config_discard(config: RegistryConfig, backend: MetricBackend) -> Any:
        return RegistryBuilder().build_discard_handles(config, backend)


def count_definitions(config: RegistryConfig) -> Dict[MetricKind, int]:
    """Number of definitions per metric kind, every kind present."""
    counts = Counter(definition.kind for definition in config)
    return {kind: counts.get(kind, 0) for kind in MetricKind}


class RegistryBuilder:
    """Creates metrics with a MetricBackend from parsed definitions."""

    def __init__(self):
        self.logger = get_obskit_logger().bind(component="RegistryBuilder")

    def build(self, config: RegistryConfig, backend: MetricBackend) -> ConfiguredRegistry:
        """
        Register every definition and keep a handle to each metric by title.

        Raises:
            DuplicateMetricNameError: A title repeats within one metric type
            BackendRegistrationError: The backend rejected a metric
        """
        counts = count_definitions(config)
        self.logger.debug("Building registry", definitions=len(config),
                          **{kind.value.lower() + "s": n for kind, n in counts.items()})

        # CPython dicts expose no capacity reservation; counts above are informational
        counters: Dict[str, CounterHandle] = {}
        gauges: Dict[str, GaugeHandle] = {}
        histograms: Dict[str, HistogramHandle] = {}
        mappings: Dict[MetricKind, Dict[str, Any]] = {
            MetricKind.COUNTER: counters,
            MetricKind.GAUGE: gauges,
            MetricKind.HISTOGRAM: histograms,
        }

        for position, definition in enumerate(config):
            self._register_unique(
                mappings[definition.kind],
                definition,
                lambda d: self._create(d, backend, position),
                position,
            )

        self.logger.info("Registry built", counters=len(counters), gauges=len(gauges),
                         histograms=len(histograms))
        return ConfiguredRegistry(backend.registry, backend, counters, gauges, histograms)

    def build_discard_handles(self, config: RegistryConfig, backend: MetricBackend) -> Any:
        """
        Register every definition without keeping per-name handles.

        Duplicate detection still applies. Returns the backend's registry.
        """
        seen: Dict[MetricKind, Dict[str, None]] = {kind: {} for kind in MetricKind}

        for position, definition in enumerate(config):
            self._register_unique(
                seen[definition.kind],
                definition,
                lambda d: self._create_discarded(d, backend, position),
                position,
            )

        self.logger.info("Registry built without handles", definitions=len(config))
        return backend.registry

    def _register_unique(self, mapping: Dict[str, H], definition: MetricDefinition,
                         make: Callable[[MetricDefinition], H], position: int):
        """Insert ``make(definition)`` under its title unless the title is taken."""
        title = definition.title
        if title in mapping:
            self.logger.error("Duplicate metric name", title=title, kind=definition.kind.value,
                              position=position)
            raise DuplicateMetricNameError(title, definition.kind.value)
        mapping[title] = make(definition)

    def _create(self, definition: MetricDefinition, backend: MetricBackend, position: int):
        try:
            if isinstance(definition, CounterDefinition):
                handle = backend.create_counter(definition.title, definition.description)
                if definition.initial_value > 0:
                    handle.inc(definition.initial_value)
                return handle

            if isinstance(definition, GaugeDefinition):
                handle = backend.create_gauge(definition.title, definition.description)
                if definition.initial_value != 0:
                    handle.set(definition.initial_value)
                return handle

            if isinstance(definition, HistogramDefinition):
                return backend.create_histogram(definition.title, definition.description,
                                                definition.buckets)
        except Exception as e:
            self.logger.error("Backend rejected metric", title=definition.title,
                              kind=definition.kind.value, error=str(e), registered_before_failure=position)
            raise BackendRegistrationError(str(e), definition.title) from e

        raise TypeError(f"Unsupported metric definition: {type(definition).__name__}")

    def _create_discarded(self, definition: MetricDefinition, backend: MetricBackend, position: int) -> None:
        self._create(definition, backend, position)
