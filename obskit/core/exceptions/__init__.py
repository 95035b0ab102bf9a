"""
Core exceptions for the obskit package.

All errors derive from ObsKitError; everything raised while loading a
configuration or building a registry derives from DeserializeError and
carries a DeserializeErrorCode.
"""

# Base exceptions
from .base import (
    ObsKitError,
    ConfigurationError
)

# Loading / building exceptions
from .deserialise import (
    DeserializeError,
    ConfigIOError,
    ConfigParseError,
    InvalidFilePathError,
    UnsupportedFileTypeError,
    SymlinkNotAllowedError,
    PathOutsideAllowedDirectoryError,
    FeatureNotEnabledError,
    BackendRegistrationError,
    DuplicateMetricNameError
)

__all__ = [
    # Base exceptions
    'ObsKitError',
    'ConfigurationError',

    # Loading / building exceptions
    'DeserializeError',
    'ConfigIOError',
    'ConfigParseError',
    'InvalidFilePathError',
    'UnsupportedFileTypeError',
    'SymlinkNotAllowedError',
    'PathOutsideAllowedDirectoryError',
    'FeatureNotEnabledError',
    'BackendRegistrationError',
    'DuplicateMetricNameError'
]
