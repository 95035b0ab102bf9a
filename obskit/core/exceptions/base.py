"""
Base exception classes for the obskit package.
"""


class ObsKitError(Exception):
    """Base exception for all obskit errors."""
    pass


class ConfigurationError(ObsKitError):
    """Raised when obskit's own settings are invalid."""

    def __init__(self, config_key: str = None, config_value: str = None, reason: str = None):
        self.config_key = config_key
        self.config_value = config_value
        self.reason = reason
        message = "Configuration error"
        if config_key:
            message += f" for '{config_key}'"
        if config_value:
            message += f" with value '{config_value}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
