"""
obskit: metrics registries built from declarative configuration files.
"""

from obskit.logger import get_obskit_logger, init_logger, setup_logging
from obskit.config import ObsKitSettings, get_settings
from obskit.backends import InMemoryBackend, MetricBackend, PrometheusBackend
from obskit.deserialise import (
    ConfiguredRegistry,
    RegistryBuilder,
    load_file,
    load_json_str,
    load_registry,
    load_yaml_str,
    validate_file_path
)

__version__ = "0.1.0"

__all__ = [
    'get_obskit_logger',
    'init_logger',
    'setup_logging',
    'ObsKitSettings',
    'get_settings',
    'InMemoryBackend',
    'MetricBackend',
    'PrometheusBackend',
    'ConfiguredRegistry',
    'RegistryBuilder',
    'load_file',
    'load_json_str',
    'load_registry',
    'load_yaml_str',
    'validate_file_path'
]
