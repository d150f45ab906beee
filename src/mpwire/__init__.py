"""mpwire: compact MessagePack-style binary codec

A Python library for encoding a small dynamically-shaped data model to and
from a compact, self-describing binary format. The encoder always picks the
narrowest header that can hold a value; the decoder accepts every width.

Key Features:
- Nil, bool, integers up to 64 bits, UTF-8 strings, binaries
- Arrays, ordered pair maps (up to 14 entries) and fixed-size extensions
- One shared format table drives both directions
- Bounded nesting depth for untrusted input

Quick Start:
    >>> from mpwire import Map, decode, encode
    >>>
    >>> data = encode([1, "two", Map([("three", b"\\x03")])])
    >>> value, rest = decode(data)
    >>> value
    [1, 'two', Map([('three', b'\\x03')])]
    >>> rest
    b''
"""

from __future__ import annotations

from .codec import decode, decode_all, encode, iter_decode, unpack
from .config import DEFAULT_CONFIG, CodecConfig
from .exceptions import ConfigError, DecodeError, EncodeError, MpwireError
from .models import ExtType, Map
from .utils import describe_header, encoded_size, header_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "decode",
    "unpack",
    "decode_all",
    "iter_decode",
    # Value model
    "Map",
    "ExtType",
    # Configuration
    "CodecConfig",
    "DEFAULT_CONFIG",
    # Exceptions
    "MpwireError",
    "EncodeError",
    "DecodeError",
    "ConfigError",
    # Sizing
    "encoded_size",
    "header_size",
    "describe_header",
    # Version
    "__version__",
]
