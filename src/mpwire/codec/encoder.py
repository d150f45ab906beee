"""MessagePack-style encoder.

This module provides the encode() function that converts a Python value to
its most compact wire representation. Format selection is driven entirely by
the tier table in formats.py.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError
from ..models import ExtType, Map
from . import formats
from .bytebuf import ByteWriter
from .formats import Format, Kind

logger = logging.getLogger(__name__)

_BINARY_TYPES = (bytes, bytearray, memoryview)
_STRICT_KEY_TYPES = (str, int, bytes)


def encode(value: Any, *, config: Optional[CodecConfig] = None) -> bytes:
    """Encode a value to compact binary format.

    The narrowest header that can represent each value is always chosen, so
    encoding is deterministic.

    Args:
        value: None, bool, int, str, bytes-like, list/tuple, Map/dict or ExtType,
            nested arbitrarily up to config.max_depth
        config: Codec configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If the value (or anything nested in it) is outside the
            supported data model

    Examples:
        ```python
        from mpwire import Map, encode

        encode(127)                     # b'\\x7f'
        encode(128)                     # b'\\xcc\\x80'
        encode(-33)                     # b'\\xd0\\xdf'
        encode([1, Map([("a", None)])]) # b'\\x92\\x01\\x81\\xa1a\\xc0'
        ```
    """
    config = config or DEFAULT_CONFIG
    writer = ByteWriter()
    try:
        _encode_value(writer, value, config, 0)
    except RecursionError as e:
        raise EncodeError(
            f"Nesting exceeds the interpreter stack; lower max_depth (currently {config.max_depth})"
        ) from e
    return writer.to_bytes()


def select_format(value: Any, config: Optional[CodecConfig] = None) -> tuple[Format, Any]:
    """Choose the wire format for a value without encoding it.

    Args:
        value: Value to classify
        config: Codec configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Tuple of (format, body) where body is the normalised payload: the int
        itself, the UTF-8/binary bytes, the list of array items, the list of
        map pairs, or the ExtType

    Raises:
        EncodeError: If the value is not encodable
    """
    config = config or DEFAULT_CONFIG

    if value is None:
        return formats.NIL, None

    if isinstance(value, bool):
        return (formats.TRUE if value else formats.FALSE), value

    if isinstance(value, str):
        try:
            data = value.encode("utf-8")
        except UnicodeEncodeError as err:
            raise EncodeError(f"String is not encodable as UTF-8: {err}") from err
        return _select_tier(formats.STR_TIERS, len(data), "str"), data

    if isinstance(value, (list, tuple)):
        items = list(value)
        return _select_tier(formats.ARRAY_TIERS, len(items), "array"), items

    if isinstance(value, (Map, dict)):
        pairs = _map_pairs(value, config)
        fmt = formats.select(formats.MAP_TIERS, len(pairs))
        if fmt is None:
            raise EncodeError(
                f"Maps with {len(pairs)} entries are not supported "
                f"(at most {formats.FIXMAP.bounds()[1]} entries)"
            )
        return fmt, pairs

    if isinstance(value, _BINARY_TYPES):
        data = bytes(value)
        return _select_tier(formats.BIN_TIERS, len(data), "bin"), data

    if isinstance(value, int):
        tiers = formats.UNSIGNED_INT_TIERS if value >= 0 else formats.SIGNED_INT_TIERS
        fmt = formats.select(tiers, value)
        if fmt is None:
            raise EncodeError(f"Integer {value} is outside the int64/uint64 range")
        return fmt, value

    if isinstance(value, ExtType):
        for fmt in formats.EXT_TIERS:
            if fmt.payload == len(value.data):
                return fmt, value
        raise EncodeError(f"Extension payload of {len(value.data)} bytes is not supported")

    if isinstance(value, float):
        raise EncodeError(f"Floating point values are not supported: {value!r}")

    raise EncodeError(f"Unsupported type {type(value).__name__}")


def _select_tier(tiers: tuple[Format, ...], length: int, label: str) -> Format:
    fmt = formats.select(tiers, length)
    if fmt is None:
        raise EncodeError(f"{label} of length {length} exceeds the 32-bit length limit")
    return fmt


def _map_pairs(value: Map | dict, config: CodecConfig) -> list[tuple[Any, Any]]:
    if isinstance(value, dict):
        if not config.accept_dict:
            raise EncodeError("dict values are disabled by config; wrap them in Map")
        pairs = list(value.items())
    else:
        pairs = value.pairs

    if config.strict_map_keys:
        for key, _ in pairs:
            if isinstance(key, bool) or not isinstance(key, _STRICT_KEY_TYPES):
                raise EncodeError(
                    f"Map key of type {type(key).__name__} not allowed with strict_map_keys"
                )
    return pairs


def _write_header(writer: ByteWriter, fmt: Format, value: int) -> None:
    """Write a header whose value (int, length or count) is unsigned."""
    if fmt.embeds_value:
        writer.write_uint(fmt.embed(value), 1)
        return

    writer.write_uint(fmt.header, 1)
    if fmt.width:
        writer.write_uint(value, fmt.width)


def _encode_value(writer: ByteWriter, value: Any, config: CodecConfig, depth: int) -> None:
    """Encode a single value at the given container depth.

    Args:
        writer: ByteWriter to append to
        value: Value to encode
        config: Codec configuration
        depth: Number of containers enclosing value

    Raises:
        EncodeError: If value is not encodable
    """
    fmt, body = select_format(value, config)
    kind = fmt.kind

    if kind is Kind.NIL or kind is Kind.BOOL:
        writer.write_uint(fmt.header, 1)
        return

    if kind is Kind.STR or kind is Kind.BIN:
        _write_header(writer, fmt, len(body))
        writer.write_bytes(body)
        return

    if kind is Kind.ARRAY:
        _enter_container(depth, config)
        _write_header(writer, fmt, len(body))
        for item in body:
            _encode_value(writer, item, config, depth + 1)
        return

    if kind is Kind.MAP:
        _enter_container(depth, config)
        _write_header(writer, fmt, len(body))
        for key, item in body:
            _encode_value(writer, key, config, depth + 1)
            _encode_value(writer, item, config, depth + 1)
        return

    if kind is Kind.INT:
        _encode_int(writer, fmt, body)
        return

    _encode_ext(writer, fmt, body)


def _encode_int(writer: ByteWriter, fmt: Format, value: int) -> None:
    if fmt.embeds_value or not fmt.signed:
        _write_header(writer, fmt, value)
        return

    # Two's complement: 2**W + value for negatives
    writer.write_uint(fmt.header, 1)
    writer.write_int(value, fmt.width)


def _encode_ext(writer: ByteWriter, fmt: Format, ext: ExtType) -> None:
    writer.write_uint(fmt.header, 1)
    writer.write_int(ext.code, 1)
    writer.write_bytes(ext.data)


def _enter_container(depth: int, config: CodecConfig) -> None:
    if depth >= config.max_depth:
        logger.debug("Refusing to encode past max_depth=%d", config.max_depth)
        raise EncodeError(f"Nesting exceeds max_depth={config.max_depth}")
