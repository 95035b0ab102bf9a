"""
Exceptions raised while loading metric configuration and building registries.
"""

from .base import ObsKitError
from ..enums.config import DeserializeErrorCode


class DeserializeError(ObsKitError):
    """Base exception for configuration loading and registry building errors."""

    def __init__(self, message: str, error_code: DeserializeErrorCode):
        self.error_code = error_code
        super().__init__(message)


class ConfigIOError(DeserializeError):
    """Raised when a configuration file cannot be opened or read."""

    def __init__(self, path: str = None, reason: str = None):
        self.path = path
        self.reason = reason
        message = "IO error"
        if path:
            message += f" for '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, DeserializeErrorCode.IO_ERROR)


class ConfigParseError(DeserializeError):
    """Raised when a document is malformed for its format or schema."""

    def __init__(self, format_name: str, reason: str):
        self.format = format_name
        self.reason = reason
        super().__init__(f"{format_name.upper()} deserialization error: {reason}", DeserializeErrorCode.PARSE_ERROR)


class InvalidFilePathError(DeserializeError):
    """Raised when a path does not exist or is not a regular file."""

    def __init__(self, path: str, reason: str = None):
        self.path = path
        self.reason = reason
        message = f"Invalid file path: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, DeserializeErrorCode.INVALID_FILE_PATH)


class UnsupportedFileTypeError(DeserializeError):
    """Raised when the file extension is not one of json, yaml or yml."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unsupported file type: {extension}", DeserializeErrorCode.UNSUPPORTED_FILE_TYPE)


class SymlinkNotAllowedError(DeserializeError):
    """Raised when the path or one of its ancestors is a symbolic link."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Symlinks are not allowed: {path}", DeserializeErrorCode.SYMLINK_NOT_ALLOWED)


class PathOutsideAllowedDirectoryError(DeserializeError):
    """Raised when the canonical path is not under any allowed base directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path outside allowed directory: {path}", DeserializeErrorCode.PATH_OUTSIDE_ALLOWED_DIRECTORY)


class FeatureNotEnabledError(DeserializeError):
    """Raised when no codec is registered for the requested format."""

    def __init__(self, feature: str):
        self.feature = feature
        super().__init__(f"Feature not enabled: {feature}", DeserializeErrorCode.FEATURE_NOT_ENABLED)


class BackendRegistrationError(DeserializeError):
    """Raised when the metric backend refuses to create a metric."""

    def __init__(self, reason: str, title: str = None):
        self.reason = reason
        self.title = title
        message = "Backend registration error"
        if title:
            message += f" for '{title}'"
        message += f": {reason}"
        super().__init__(message, DeserializeErrorCode.BACKEND_ERROR)


class DuplicateMetricNameError(DeserializeError):
    """Raised when two definitions of the same metric type share a title."""

    def __init__(self, title: str, kind: str = None):
        self.title = title
        self.kind = kind
        message = f"Duplicate metric name: {title}"
        if kind:
            message += f" (already registered as {kind})"
        super().__init__(message, DeserializeErrorCode.DUPLICATE_METRIC_NAME)
