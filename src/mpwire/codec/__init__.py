"""Compact binary codec for mpwire.

This module provides encoding and decoding between Python values and the
MessagePack-style wire format.
"""

from __future__ import annotations

from .decoder import decode, decode_all, iter_decode, unpack
from .encoder import encode, select_format
from .formats import Format, Kind

__all__ = [
    "encode",
    "decode",
    "unpack",
    "decode_all",
    "iter_decode",
    "select_format",
    "Format",
    "Kind",
]
