"""
Shared pytest configuration and fixtures for the obskit tests.
"""

from pathlib import Path

import pytest

from obskit.backends import InMemoryBackend, PrometheusBackend


SAMPLE_JSON = """
[
    {"metric_type": "Counter", "title": "requests", "description": "Total requests", "value": 10},
    {"metric_type": "Gauge", "title": "active_connections", "description": "Open connections", "value": -5},
    {"metric_type": "Histogram", "title": "latency", "description": "Request latency", "buckets": [0.1, 0.5, 1.0]},
    {"metric_type": "Histogram", "title": "payload_size", "description": "Payload size"}
]
"""

SAMPLE_YAML = """
- metric_type: Counter
  title: requests
  description: Total requests
  value: 10
- metric_type: Gauge
  title: active_connections
  description: Open connections
  value: -5
- metric_type: Histogram
  title: latency
  description: Request latency
  buckets: [0.1, 0.5, 1.0]
- metric_type: Histogram
  title: payload_size
  description: Payload size
"""


@pytest.fixture(scope="session")
def sample_json():
    return SAMPLE_JSON


@pytest.fixture(scope="session")
def sample_yaml():
    return SAMPLE_YAML


@pytest.fixture
def sandbox(tmp_path, monkeypatch):
    """
    An isolated directory layout for path validation tests.

    The working directory is ``<root>/cwd`` and XDG_CONFIG_HOME points at
    ``<root>/xdg``; ``<root>/outside`` is under neither. The root is
    canonicalized so no ancestor is a symlink (e.g. /var on macOS).
    """
    root = tmp_path.resolve()
    layout = {name: root / name for name in ("cwd", "xdg", "outside", "home")}
    for directory in layout.values():
        directory.mkdir()

    monkeypatch.chdir(layout["cwd"])
    monkeypatch.setenv("XDG_CONFIG_HOME", str(layout["xdg"]))
    monkeypatch.setenv("HOME", str(layout["home"]))

    layout["root"] = root
    return layout


@pytest.fixture
def write_file():
    """Write ``content`` to ``path`` (creating parents) and return the path."""
    def _write(path: Path, content: str = "[]") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def memory_backend():
    return InMemoryBackend()


@pytest.fixture
def prometheus_backend():
    return PrometheusBackend()


def pytest_collection_modifyitems(items):
    # Every test here is a unit test; the marker lets run_tests.py select them
    for item in items:
        item.add_marker(pytest.mark.unit)
