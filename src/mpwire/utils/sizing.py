"""Encoded size calculation utilities.

This module provides functions to calculate the encoded size of values
without actually encoding them.
"""

from __future__ import annotations

from typing import Any, Optional

from ..codec import formats
from ..codec.encoder import select_format
from ..codec.formats import Kind
from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError


def header_size(value: Any, config: Optional[CodecConfig] = None) -> int:
    """Calculate the size of the outermost header of a value in bytes.

    For integers this is the whole encoding. For strings, binaries and
    containers it excludes the payload; for extensions it includes the type
    byte but not the payload.

    Raises:
        EncodeError: If the value is not encodable

    Example:
        >>> header_size("x" * 40)
        2  # str8: header byte + 1 length byte
        >>> header_size(70000)
        5  # uint32
    """
    fmt, _ = select_format(value, config)
    return fmt.header_length


def encoded_size(value: Any, config: Optional[CodecConfig] = None) -> int:
    """Calculate the encoded size of a value in bytes.

    The result always equals len(encode(value, config=config)).

    Args:
        value: Value to measure
        config: Codec configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Size in bytes

    Raises:
        EncodeError: If the value (or anything nested in it) is not encodable

    Example:
        >>> encoded_size([1, 2, 300])
        6  # fixarray header + 1 + 1 + 3 (uint16)
    """
    config = config or DEFAULT_CONFIG
    try:
        return _size(value, config, 0)
    except RecursionError as e:
        raise EncodeError(
            f"Nesting exceeds the interpreter stack; lower max_depth (currently {config.max_depth})"
        ) from e


def _size(value: Any, config: CodecConfig, depth: int) -> int:
    fmt, body = select_format(value, config)
    size = fmt.header_length

    if fmt.kind is Kind.STR or fmt.kind is Kind.BIN:
        return size + len(body)

    if fmt.kind is Kind.EXT:
        return size + fmt.payload

    if fmt.kind is Kind.ARRAY or fmt.kind is Kind.MAP:
        if depth >= config.max_depth:
            raise EncodeError(f"Nesting exceeds max_depth={config.max_depth}")
        children = body if fmt.kind is Kind.ARRAY else [item for pair in body for item in pair]
        return size + sum(_size(child, config, depth + 1) for child in children)

    return size


def describe_header(header_byte: int) -> str:
    """Name the format of a leading byte.

    Example:
        >>> describe_header(0x93)
        'fixarray(3)'
        >>> describe_header(0xCD)
        'uint16'
        >>> describe_header(0xCA)
        'float32 (unsupported)'
    """
    return formats.describe(header_byte)
