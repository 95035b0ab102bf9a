"""
Core enums for the obskit package.
"""

from .config import (
    ConfigFormat,
    MetricKind,
    DeserializeErrorCode
)

__all__ = [
    'ConfigFormat',
    'MetricKind',
    'DeserializeErrorCode'
]
