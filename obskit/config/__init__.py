"""
Settings for the obskit package.
"""

from .settings import ObsKitSettings


def get_settings() -> ObsKitSettings:
    """Settings read from the current environment."""
    return ObsKitSettings.from_env()


__all__ = [
    'ObsKitSettings',
    'get_settings'
]
