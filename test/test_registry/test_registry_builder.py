from unittest.mock import Mock, call

import pytest

from obskit.backends.base import MetricBackend
from obskit.core.enums import DeserializeErrorCode, MetricKind
from obskit.core.exceptions import BackendRegistrationError, DuplicateMetricNameError
from obskit.deserialise.definitions import (
    DEFAULT_LATENCY_BUCKETS,
    CounterDefinition,
    GaugeDefinition,
    HistogramDefinition,
)
from obskit.deserialise.registry import ConfiguredRegistry, RegistryBuilder, count_definitions


def registered_names(backend):
    return [(metric.kind, metric.name) for metric in backend.registry.metrics]


@pytest.fixture
def mock_backend():
    backend = Mock(spec=MetricBackend)
    backend.registry = object()
    return backend


class TestRegistryBuilder:
    """Building a ConfiguredRegistry with the in-memory backend."""

    def setup_method(self):
        self.builder = RegistryBuilder()

    def test_empty_config(self, memory_backend):
        configured = self.builder.build([], memory_backend)

        assert configured.counters == {}
        assert configured.gauges == {}
        assert configured.histograms == {}
        assert configured.registry is memory_backend.registry
        assert configured.render() == ""

    def test_every_title_lands_in_its_type_mapping(self, memory_backend):
        config = [
            CounterDefinition("requests", "Total requests"),
            CounterDefinition("errors", "Total errors"),
            GaugeDefinition("in_flight", "In flight requests"),
            HistogramDefinition("latency", "Latency"),
        ]

        configured = self.builder.build(config, memory_backend)

        assert len(configured) == 4
        assert set(configured.counters) == {"requests", "errors"}
        assert set(configured.gauges) == {"in_flight"}
        assert set(configured.histograms) == {"latency"}

    def test_handles_are_live(self, memory_backend):
        configured = self.builder.build([CounterDefinition("requests", "Total requests")], memory_backend)

        counter = configured.counters["requests"]
        assert counter.get() == 0
        counter.inc()
        assert counter.get() == 1
        assert "requests_total 1" in configured.render()

    def test_same_title_across_types_is_allowed(self, memory_backend):
        config = [
            CounterDefinition("metric", "as counter"),
            GaugeDefinition("metric", "as gauge"),
            HistogramDefinition("metric", "as histogram"),
        ]

        configured = self.builder.build(config, memory_backend)

        assert "metric" in configured.counters
        assert "metric" in configured.gauges
        assert "metric" in configured.histograms

    def test_duplicate_within_type_aborts(self, memory_backend):
        config = [
            GaugeDefinition("first", "registered"),
            CounterDefinition("dup", "first occurrence"),
            CounterDefinition("dup", "second occurrence"),
            GaugeDefinition("after", "never registered"),
        ]

        with pytest.raises(DuplicateMetricNameError) as exc_info:
            self.builder.build(config, memory_backend)

        assert exc_info.value.title == "dup"
        assert exc_info.value.kind == MetricKind.COUNTER.value
        assert exc_info.value.error_code is DeserializeErrorCode.DUPLICATE_METRIC_NAME
        # Earlier definitions stay registered; nothing after the duplicate is created
        assert registered_names(memory_backend) == [("gauge", "first"), ("counter", "dup")]

    def test_counter_initial_value(self, memory_backend):
        configured = self.builder.build([CounterDefinition("count", "A counter", 10)], memory_backend)

        assert configured.counters["count"].get() == 10

    def test_gauge_initial_value(self, memory_backend):
        configured = self.builder.build([GaugeDefinition("level", "Level", -5)], memory_backend)

        assert configured.gauges["level"].get() == -5

    def test_histogram_default_buckets(self, memory_backend):
        configured = self.builder.build([HistogramDefinition("latency", "Latency")], memory_backend)

        assert configured.histograms["latency"].buckets == list(DEFAULT_LATENCY_BUCKETS)

    def test_histogram_custom_buckets_pass_through(self, memory_backend):
        buckets = [2.0, 0.5, 1.0]

        configured = self.builder.build([HistogramDefinition("latency", "Latency", buckets)], memory_backend)

        histogram = configured.histograms["latency"]
        assert histogram.buckets == [2.0, 0.5, 1.0]
        histogram.observe(0.7)
        assert histogram.count() == 1
        assert histogram.sum() == 0.7

    def test_backend_rejection_is_wrapped(self, memory_backend):
        config = [
            CounterDefinition("good", "registered"),
            CounterDefinition("bad name", "rejected by the backend"),
            CounterDefinition("later", "never registered"),
        ]

        with pytest.raises(BackendRegistrationError) as exc_info:
            self.builder.build(config, memory_backend)

        assert exc_info.value.title == "bad name"
        assert "Invalid metric name" in exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert registered_names(memory_backend) == [("counter", "good")]

    def test_from_config_alias(self, memory_backend):
        configured = ConfiguredRegistry.from_config([GaugeDefinition("g", "d", 3)], memory_backend)

        assert configured.gauges["g"].get() == 3

    def test_backend_is_required(self, memory_backend):
        with pytest.raises(TypeError):
            ConfiguredRegistry(memory_backend.registry)

    def test_render_goes_through_its_backend(self, memory_backend):
        configured = ConfiguredRegistry(memory_backend.registry, memory_backend)

        assert configured.render() == ""
        assert len(configured) == 0


class TestRegistryBuilderBackendCalls:
    """Exact calls made against the backend capability interface."""

    def setup_method(self):
        self.builder = RegistryBuilder()

    def test_zero_counter_value_does_not_increment(self, mock_backend):
        self.builder.build([CounterDefinition("c", "d", 0)], mock_backend)

        mock_backend.create_counter.return_value.inc.assert_not_called()

    def test_counter_incremented_once_by_initial_value(self, mock_backend):
        self.builder.build([CounterDefinition("c", "d", 10)], mock_backend)

        mock_backend.create_counter.return_value.inc.assert_called_once_with(10)

    def test_zero_gauge_value_does_not_set(self, mock_backend):
        self.builder.build([GaugeDefinition("g", "d", 0)], mock_backend)

        mock_backend.create_gauge.return_value.set.assert_not_called()

    def test_gauge_set_once(self, mock_backend):
        self.builder.build([GaugeDefinition("g", "d", -5)], mock_backend)

        mock_backend.create_gauge.return_value.set.assert_called_once_with(-5)

    def test_registration_follows_document_order(self, mock_backend):
        config = [
            HistogramDefinition("h", "histogram", [0.1, 1.0]),
            CounterDefinition("c", "counter"),
            GaugeDefinition("g", "gauge"),
        ]

        self.builder.build(config, mock_backend)

        assert mock_backend.method_calls == [
            call.create_histogram("h", "histogram", [0.1, 1.0]),
            call.create_counter("c", "counter"),
            call.create_gauge("g", "gauge"),
        ]

    def test_backend_exception_aborts_build(self, mock_backend):
        mock_backend.create_gauge.side_effect = RuntimeError("registry is closed")

        with pytest.raises(BackendRegistrationError, match="registry is closed"):
            self.builder.build([GaugeDefinition("g", "d"), CounterDefinition("c", "d")], mock_backend)

        mock_backend.create_counter.assert_not_called()

    def test_failing_initial_value_is_wrapped(self, mock_backend):
        mock_backend.create_counter.return_value.inc.side_effect = ValueError("overflow")

        with pytest.raises(BackendRegistrationError, match="overflow"):
            self.builder.build([CounterDefinition("c", "d", 5)], mock_backend)

    def test_unknown_definition_type(self, mock_backend):
        unknown = Mock(title="x", kind=MetricKind.COUNTER)

        with pytest.raises(TypeError):
            self.builder.build([unknown], mock_backend)


class TestBuildDiscardHandles:

    def setup_method(self):
        self.builder = RegistryBuilder()

    def test_returns_backend_registry(self, memory_backend):
        config = [CounterDefinition("c", "d", 2), GaugeDefinition("c", "d"), HistogramDefinition("h", "d")]

        registry = self.builder.build_discard_handles(config, memory_backend)

        assert registry is memory_backend.registry
        assert registered_names(memory_backend) == [("counter", "c"), ("gauge", "c"), ("histogram", "h")]
        assert "c_total 2" in memory_backend.render()

    def test_duplicates_still_detected(self, memory_backend):
        config = [HistogramDefinition("h", "d"), HistogramDefinition("h", "again")]

        with pytest.raises(DuplicateMetricNameError):
            ConfiguredRegistry.from_config_discard(config, memory_backend)


def test_count_definitions():
    config = [CounterDefinition("a", "d"), CounterDefinition("b", "d"), HistogramDefinition("h", "d")]

    assert count_definitions(config) == {
        MetricKind.COUNTER: 2,
        MetricKind.GAUGE: 0,
        MetricKind.HISTOGRAM: 1,
    }
