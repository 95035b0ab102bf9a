import threading

import pytest

from obskit.backends import InMemoryBackend


class TestInMemoryBackend:

    def setup_method(self):
        self.backend = InMemoryBackend()

    def test_rejects_invalid_names(self):
        with pytest.raises(ValueError, match="Invalid metric name"):
            self.backend.create_gauge("9lives", "starts with a digit")

    def test_rejects_same_kind_twice(self):
        self.backend.create_counter("hits", "Hits")

        with pytest.raises(ValueError, match="already registered"):
            self.backend.create_counter("hits", "Hits again")

    def test_counter_cannot_decrease(self):
        counter = self.backend.create_counter("hits", "Hits")

        with pytest.raises(ValueError):
            counter.inc(-1)

    def test_render(self):
        self.backend.create_counter("hits", "Hits").inc(2)
        self.backend.create_gauge("temp", "Temperature\nin C").set(-3)
        self.backend.create_histogram("latency", "Latency", [1.0, 0.5]).observe(0.7)

        assert self.backend.render().splitlines() == [
            "# HELP hits Hits",
            "# TYPE hits counter",
            "hits_total 2",
            "# HELP temp Temperature\\nin C",
            "# TYPE temp gauge",
            "temp -3",
            "# HELP latency Latency",
            "# TYPE latency histogram",
            'latency_bucket{le="0.5"} 0',
            'latency_bucket{le="1.0"} 1',
            'latency_bucket{le="+Inf"} 1',
            "latency_count 1",
            "latency_sum 0.7",
        ]

    def test_concurrent_increments(self):
        counter = self.backend.create_counter("hits", "Hits")

        def work():
            for _ in range(1000):
                counter.inc()

        threads = [threading.Thread(target=work) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert counter.get() == 4000
