"""
Configuration-related enums for the obskit package.
"""

from enum import Enum
from typing import Optional


class ConfigFormat(Enum):
    """Document formats a metrics configuration may be written in."""
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def from_extension(cls, extension: str) -> Optional["ConfigFormat"]:
        """Map a file extension (without the dot, case-sensitive) to a format."""
        return _EXTENSIONS.get(extension)


_EXTENSIONS = {
    "json": ConfigFormat.JSON,
    "yaml": ConfigFormat.YAML,
    "yml": ConfigFormat.YAML,
}


class MetricKind(Enum):
    """Metric types, valued by the discriminator used in config documents."""
    COUNTER = "Counter"
    GAUGE = "Gauge"
    HISTOGRAM = "Histogram"


class DeserializeErrorCode(Enum):
    """Standardized error codes for configuration loading and registry building."""
    IO_ERROR = "io_error"
    PARSE_ERROR = "parse_error"
    INVALID_FILE_PATH = "invalid_file_path"
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    SYMLINK_NOT_ALLOWED = "symlink_not_allowed"
    PATH_OUTSIDE_ALLOWED_DIRECTORY = "path_outside_allowed_directory"
    FEATURE_NOT_ENABLED = "feature_not_enabled"
    BACKEND_ERROR = "backend_error"
    DUPLICATE_METRIC_NAME = "duplicate_metric_name"
