"""Exception hierarchy for mpwire.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from MpwireError for easy catching of any mpwire-specific error.
"""

from __future__ import annotations


class MpwireError(Exception):
    """Base exception for all mpwire errors."""

    pass


class EncodeError(MpwireError):
    """Raised when a value cannot be encoded.

    Examples:
        - Unsupported Python type (float, set, arbitrary objects)
        - Integer outside the uint64/int64 range
        - Map with 15 or more entries
        - String or binary longer than 2**32 - 1 bytes
        - Nesting deeper than the configured maximum
    """

    pass


class DecodeError(MpwireError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes for a declared length)
        - Leading byte that matches no known format
        - Format outside the supported scope (floats, ext8/16/32, map16/32)
        - Invalid UTF-8 in a string payload
        - Nesting deeper than the configured maximum
    """

    pass


class ConfigError(MpwireError, ValueError):
    """Raised when a codec configuration is invalid."""

    pass
