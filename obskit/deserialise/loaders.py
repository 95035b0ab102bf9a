"""
Entry points for loading metric configuration.

File entry points always run PathValidator before reading. String entry
points take content directly and are not path-validated.
"""

from typing import Optional

from obskit.backends.base import MetricBackend
from obskit.core.enums import ConfigFormat
from obskit.deserialise.definitions import RegistryConfig
from obskit.deserialise.formats import CodecRegistry, Content
from obskit.deserialise.parser import ConfigParser
from obskit.deserialise.paths import PathLike, PathValidator
from obskit.deserialise.registry import ConfiguredRegistry, RegistryBuilder


def load_file(path: PathLike, extra_base: Optional[PathLike] = None,
              codecs: Optional[CodecRegistry] = None) -> RegistryConfig:
    """
    Validate ``path``, then deserialize it with the codec for its extension.

    Raises:
        InvalidFilePathError, SymlinkNotAllowedError,
        PathOutsideAllowedDirectoryError, UnsupportedFileTypeError: Path rejected
        FeatureNotEnabledError: The file's format has no registered codec
        ConfigIOError, ConfigParseError: The file could not be read or parsed
    """
    validated = PathValidator().validate(path, extra_base)
    return ConfigParser(codecs).parse_file(validated)


def load_str(content: Content, config_format: ConfigFormat,
             codecs: Optional[CodecRegistry] = None) -> RegistryConfig:
    return ConfigParser(codecs).parse(content, config_format)


def load_json_str(content: Content, codecs: Optional[CodecRegistry] = None) -> RegistryConfig:
    """
    Load a registry configuration from a JSON string.

    Example:
        load_json_str('[{"metric_type": "Counter", "title": "hits", "description": "Hits"}]')
    """
    return load_str(content, ConfigFormat.JSON, codecs)


def load_yaml_str(content: Content, codecs: Optional[CodecRegistry] = None) -> RegistryConfig:
    """Load a registry configuration from a YAML string."""
    return load_str(content, ConfigFormat.YAML, codecs)


def load_registry(path: PathLike, backend: MetricBackend, extra_base: Optional[PathLike] = None,
                  codecs: Optional[CodecRegistry] = None) -> ConfiguredRegistry:
    """Validate, parse and build in one call."""
    config = load_file(path, extra_base, codecs)
    return RegistryBuilder().build(config, backend)
