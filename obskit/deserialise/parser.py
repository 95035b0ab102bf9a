"""
Configuration document parser.

Decoding is delegated to the codec registered for the document's format;
this module only maps codec failures into ConfigParseError and normalizes the
decoded value into a RegistryConfig.
"""

from typing import Any, Mapping, Optional

from obskit.core.enums import ConfigFormat, MetricKind
from obskit.core.exceptions import ConfigIOError, ConfigParseError
from obskit.deserialise.definitions import (
    DEFAULT_LATENCY_BUCKETS,
    CounterDefinition,
    GaugeDefinition,
    HistogramDefinition,
    MetricDefinition,
    RegistryConfig,
    ValidatedPath,
)
from obskit.deserialise.formats import CodecRegistry, Content, default_codecs
from obskit.deserialise.schema import (
    BUCKETS_FIELD,
    METRIC_TYPE_FIELD,
    VALUE_FIELD,
    DefinitionValidator,
)
from obskit.logger import get_obskit_logger


class ConfigParser:
    """Turns JSON or YAML content into a RegistryConfig."""

    def __init__(self, codecs: Optional[CodecRegistry] = None):
        self.codecs = codecs if codecs is not None else default_codecs()
        self.validator = DefinitionValidator()
        self.logger = get_obskit_logger().bind(component="ConfigParser")

    def parse(self, content: Content, config_format: ConfigFormat) -> RegistryConfig:
        """
        Parse ``content`` written in ``config_format``.

        Raises:
            FeatureNotEnabledError: No codec is registered for the format
            ConfigParseError: The content is malformed or violates the schema
        """
        codec = self.codecs.get(config_format)
        try:
            document = codec.decode(content)
        except codec.errors as e:
            self.logger.warning("Failed to decode config", format=config_format.value, error=str(e))
            raise ConfigParseError(config_format.value, str(e)) from e

        self.logger.debug("Config decoded", format=config_format.value)
        return self.normalize(document, config_format)

    def parse_file(self, validated: ValidatedPath) -> RegistryConfig:
        """
        Read and parse a file that has already passed PathValidator.

        The codec lookup happens before the file is opened.
        """
        if not isinstance(validated, ValidatedPath):
            raise TypeError(
                f"parse_file() requires a ValidatedPath, got {type(validated).__name__}; "
                "run the path through PathValidator first"
            )
        self.codecs.get(validated.format)

        try:
            content = validated.path.read_bytes()
        except OSError as e:
            self.logger.error("Failed to read config file", path=str(validated.path), error=str(e))
            raise ConfigIOError(str(validated.path), str(e)) from e

        return self.parse(content, validated.format)

    def normalize(self, document: Any, config_format: ConfigFormat) -> RegistryConfig:
        """Validate a decoded document and convert it to definitions."""
        result = self.validator.validate_document(document)
        if not result:
            reasons = "; ".join(error.message for error in result.errors)
            self.logger.warning("Config failed schema validation",
                                format=config_format.value, errors=len(result.errors))
            raise ConfigParseError(config_format.value, reasons)

        return [_to_definition(entry) for entry in document]


def _to_definition(entry: Mapping[str, Any]) -> MetricDefinition:
    kind = MetricKind(entry[METRIC_TYPE_FIELD])
    title = entry['title']
    description = entry['description']

    if kind is MetricKind.COUNTER:
        return CounterDefinition(title, description, entry.get(VALUE_FIELD, 0))
    if kind is MetricKind.GAUGE:
        return GaugeDefinition(title, description, entry.get(VALUE_FIELD, 0))

    buckets = entry.get(BUCKETS_FIELD, DEFAULT_LATENCY_BUCKETS)
    return HistogramDefinition(title, description, [float(bound) for bound in buckets])
