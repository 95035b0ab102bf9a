"""
Runtime settings for obskit.

Settings control logging and which configuration formats the loader accepts.
They can be built from defaults, a dictionary, or OBSKIT_* environment
variables.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from obskit.core.enums import ConfigFormat
from obskit.core.exceptions import ConfigurationError
from obskit.deserialise.formats import CodecRegistry

ENV_LOG_LEVEL = "OBSKIT_LOG_LEVEL"
ENV_JSON_LOGS = "OBSKIT_JSON_LOGS"
ENV_EXTRA_BASE = "OBSKIT_EXTRA_CONFIG_BASE"
ENV_FORMATS = "OBSKIT_CONFIG_FORMATS"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ObsKitSettings:
    """
    Settings for logging and configuration loading.

    ``enabled_formats`` is the set of document formats whose codecs are
    registered at start-up; loading any other format raises
    FeatureNotEnabledError.
    """

    log_level: str = "INFO"
    json_logs: bool = False
    extra_base: Optional[str] = None
    enabled_formats: List[str] = field(default_factory=lambda: [f.value for f in ConfigFormat])

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError("log_level", self.log_level, f"expected one of {', '.join(LOG_LEVELS)}")
        self.formats()

    def formats(self) -> List[ConfigFormat]:
        """Enabled formats as ConfigFormat members."""
        formats = []
        for name in self.enabled_formats:
            try:
                formats.append(ConfigFormat(name.strip().lower()))
            except ValueError:
                raise ConfigurationError("enabled_formats", name, "unknown configuration format") from None
        return formats

    def codec_registry(self) -> CodecRegistry:
        """Codec registry holding exactly the enabled formats."""
        return CodecRegistry.for_formats(self.formats())

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return {
            'log_level': self.log_level,
            'json_logs': self.json_logs,
            'extra_base': self.extra_base,
            'enabled_formats': list(self.enabled_formats)
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ObsKitSettings':
        """Create settings from dictionary."""
        defaults = cls()
        return cls(
            log_level=data.get('log_level', defaults.log_level),
            json_logs=data.get('json_logs', defaults.json_logs),
            extra_base=data.get('extra_base', defaults.extra_base),
            enabled_formats=list(data.get('enabled_formats', defaults.enabled_formats))
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ObsKitSettings':
        """Create settings from OBSKIT_* environment variables."""
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}

        if env.get(ENV_LOG_LEVEL):
            data['log_level'] = env[ENV_LOG_LEVEL]
        if env.get(ENV_JSON_LOGS):
            data['json_logs'] = env[ENV_JSON_LOGS].strip().lower() in TRUE_VALUES
        if env.get(ENV_EXTRA_BASE):
            data['extra_base'] = env[ENV_EXTRA_BASE]
        if env.get(ENV_FORMATS):
            data['enabled_formats'] = [name for name in env[ENV_FORMATS].split(",") if name.strip()]

        return cls.from_dict(data)
