"""
Building metric registries from configuration files.

Flow: PathValidator.validate -> ConfigParser.parse_file -> RegistryBuilder.build.
"""

from .definitions import (
    DEFAULT_LATENCY_BUCKETS,
    CounterDefinition,
    GaugeDefinition,
    HistogramDefinition,
    MetricDefinition,
    RegistryConfig,
    ValidatedPath
)
from .formats import Codec, CodecRegistry, default_codecs
from .paths import PathValidator, allowed_base_directories, validate_file_path
from .parser import ConfigParser
from .registry import ConfiguredRegistry, RegistryBuilder
from .loaders import load_file, load_str, load_json_str, load_yaml_str, load_registry

__all__ = [
    # Data model
    'DEFAULT_LATENCY_BUCKETS',
    'CounterDefinition',
    'GaugeDefinition',
    'HistogramDefinition',
    'MetricDefinition',
    'RegistryConfig',
    'ValidatedPath',

    # Formats
    'Codec',
    'CodecRegistry',
    'default_codecs',

    # Components
    'PathValidator',
    'allowed_base_directories',
    'validate_file_path',
    'ConfigParser',
    'ConfiguredRegistry',
    'RegistryBuilder',

    # Entry points
    'load_file',
    'load_str',
    'load_json_str',
    'load_yaml_str',
    'load_registry'
]
