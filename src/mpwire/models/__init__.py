"""Value model for mpwire.

This module provides the container types that have no direct Python builtin
equivalent: ordered pair maps and extension values.
"""

from __future__ import annotations

from .ext import EXT_PAYLOAD_SIZES, ExtType
from .map import Map

__all__ = [
    "EXT_PAYLOAD_SIZES",
    "ExtType",
    "Map",
]
