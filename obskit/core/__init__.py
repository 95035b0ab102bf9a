"""
Core module for the obskit package.

This module provides the foundational components used throughout the package:
- Exception classes for loading and building
- Enum definitions for formats, metric kinds and error codes
"""

from .exceptions import *
from .enums import *

__all__ = []

from .exceptions import __all__ as exceptions_all
from .enums import __all__ as enums_all

__all__.extend(exceptions_all)
__all__.extend(enums_all)
