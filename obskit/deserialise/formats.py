"""
Format codec capability registry.

The embedding application decides at start-up which document formats it
supports by registering a decoder per ConfigFormat. Asking for a format that
was never registered raises FeatureNotEnabledError, which keeps "this build
does not read YAML" apart from "this YAML is malformed".
"""

import json
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Tuple, Type, Union

import yaml

from obskit.core.enums import ConfigFormat
from obskit.core.exceptions import FeatureNotEnabledError

Content = Union[str, bytes]


@dataclass(frozen=True)
class Codec:
    """A decoder and the exceptions it raises for malformed input."""
    format: ConfigFormat
    decode: Callable[[Content], Any]
    errors: Tuple[Type[BaseException], ...]


def _decode_json(content: Content) -> Any:
    return json.loads(content)


def _decode_yaml(content: Content) -> Any:
    return yaml.safe_load(content)


# json.JSONDecodeError and UnicodeDecodeError are both ValueErrors.
# Both decoders recurse per nesting level.
JSON_CODEC = Codec(ConfigFormat.JSON, _decode_json, (ValueError, RecursionError))
YAML_CODEC = Codec(ConfigFormat.YAML, _decode_yaml, (yaml.YAMLError, ValueError, RecursionError))

BUILTIN_CODECS = {
    ConfigFormat.JSON: JSON_CODEC,
    ConfigFormat.YAML: YAML_CODEC,
}


class CodecRegistry:
    """Maps each enabled ConfigFormat to its Codec."""

    def __init__(self, codecs: Iterable[Codec] = ()):
        self._lock = threading.RLock()
        self._codecs: Dict[ConfigFormat, Codec] = {}
        for codec in codecs:
            self.register(codec)

    def register(self, codec: Codec) -> Codec:
        with self._lock:
            self._codecs[codec.format] = codec
            return codec

    def unregister(self, config_format: ConfigFormat):
        with self._lock:
            self._codecs.pop(config_format, None)

    def is_enabled(self, config_format: ConfigFormat) -> bool:
        with self._lock:
            return config_format in self._codecs

    def get(self, config_format: ConfigFormat) -> Codec:
        with self._lock:
            codec = self._codecs.get(config_format)
        if codec is None:
            raise FeatureNotEnabledError(
                f"no codec registered for {config_format.value}; enable the "
                f"{config_format.value} format to load {config_format.value.upper()} configuration"
            )
        return codec

    def formats(self) -> list[ConfigFormat]:
        with self._lock:
            return list(self._codecs)

    @classmethod
    def for_formats(cls, formats: Iterable[ConfigFormat]) -> "CodecRegistry":
        """Registry holding the built-in codecs for ``formats``."""
        return cls(BUILTIN_CODECS[config_format] for config_format in formats)


def default_codecs() -> CodecRegistry:
    """Registry with every built-in codec enabled."""
    return CodecRegistry(BUILTIN_CODECS.values())
