"""MessagePack-style decoder.

This module provides decode() and its convenience wrappers. The leading byte
of each value is looked up in the shared format table, so every width tier is
accepted regardless of whether the encoder would have chosen it.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import DecodeError
from ..models import ExtType, Map
from . import formats
from .bytebuf import ByteReader
from .formats import Format, Kind

logger = logging.getLogger(__name__)


def decode(data: bytes, *, config: Optional[CodecConfig] = None) -> tuple[Any, bytes]:
    """Decode one value from the front of a buffer.

    Args:
        data: Buffer starting with an encoded value
        config: Codec configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Tuple of (value, remaining bytes after the value)

    Raises:
        DecodeError: If data is empty, truncated, starts with an unknown or
            unsupported header byte, or nests deeper than config.max_depth

    Examples:
        ```python
        from mpwire import decode

        decode(b"\\x05rest")                    # (5, b'rest')
        decode(b"\\xce\\x00\\x00\\x00\\x05")    # (5, b'') from a uint32 header
        ```
    """
    config = config or DEFAULT_CONFIG
    reader = _reader_for(data)
    value = _decode_from(reader, config)
    return value, reader.remaining()


def unpack(data: bytes, *, config: Optional[CodecConfig] = None) -> Any:
    """Decode a buffer holding exactly one value.

    Raises:
        DecodeError: If decoding fails or bytes are left over
    """
    value, rest = decode(data, config=config)
    if rest:
        raise DecodeError(f"{len(rest)} trailing bytes after value")
    return value


def iter_decode(data: bytes, *, config: Optional[CodecConfig] = None) -> Iterator[Any]:
    """Yield each value of a buffer holding concatenated complete values.

    Raises:
        DecodeError: If any value is malformed or the buffer ends mid-value
    """
    config = config or DEFAULT_CONFIG
    reader = _reader_for(data)
    while reader.bytes_remaining():
        yield _decode_from(reader, config)


def decode_all(data: bytes, *, config: Optional[CodecConfig] = None) -> list[Any]:
    """Decode every value of a buffer holding concatenated complete values."""
    return list(iter_decode(data, config=config))


def _reader_for(data: bytes) -> ByteReader:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError(f"Expected a bytes-like object, got {type(data).__name__}")
    return ByteReader(data)


def _decode_from(reader: ByteReader, config: CodecConfig) -> Any:
    start = reader.position()
    try:
        return _decode_value(reader, config, 0)
    except IndexError as e:
        raise DecodeError(f"Truncated data in value starting at offset {start}: {e}") from e
    except RecursionError as e:
        raise DecodeError(
            f"Nesting in value starting at offset {start} exceeds the interpreter stack; "
            f"lower max_depth (currently {config.max_depth})"
        ) from e


def _decode_value(reader: ByteReader, config: CodecConfig, depth: int) -> Any:
    """Decode a single value at the given container depth.

    Args:
        reader: ByteReader positioned at a header byte
        config: Codec configuration
        depth: Number of containers enclosing the value

    Returns:
        Decoded value

    Raises:
        DecodeError: If the header byte is not handled or a payload is invalid
        IndexError: If data is truncated
    """
    offset = reader.position()
    header = reader.read_byte()
    fmt = formats.lookup(header)

    if fmt is None:
        name = formats.UNSUPPORTED.get(header)
        logger.debug("Rejected header 0x%02x at offset %d", header, offset)
        if name is not None:
            raise DecodeError(f"Unsupported format {name} (0x{header:02x}) at offset {offset}")
        raise DecodeError(f"Invalid header byte 0x{header:02x} at offset {offset}")

    kind = fmt.kind

    if kind is Kind.NIL:
        return None

    if kind is Kind.BOOL:
        return fmt is formats.TRUE

    if kind is Kind.STR:
        raw = reader.read_bytes(_read_header(reader, fmt, header))
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 in string at offset {offset}: {e}") from e

    if kind is Kind.ARRAY:
        count = _read_header(reader, fmt, header)
        _enter_container(depth, config, offset)
        return [_decode_value(reader, config, depth + 1) for _ in range(count)]

    if kind is Kind.MAP:
        # fixmap decodes the full 0-15 nibble; the encoder stops at 14
        count = _read_header(reader, fmt, header)
        _enter_container(depth, config, offset)
        pairs = []
        for _ in range(count):
            key = _decode_value(reader, config, depth + 1)
            pairs.append((key, _decode_value(reader, config, depth + 1)))
        return Map(pairs)

    if kind is Kind.BIN:
        return reader.read_bytes(_read_header(reader, fmt, header))

    if kind is Kind.INT:
        return _read_header(reader, fmt, header)

    return _decode_ext(reader, fmt)


def _read_header(reader: ByteReader, fmt: Format, header: int) -> int:
    """Return the integer, length or count carried by a header.

    Spanning formats carry it in the header byte itself; the others are
    followed by a big-endian field of fmt.width bytes.
    """
    if fmt.embeds_value:
        return fmt.extract(header)
    if fmt.signed:
        return reader.read_int(fmt.width)
    return reader.read_uint(fmt.width)


def _decode_ext(reader: ByteReader, fmt: Format) -> ExtType:
    code = reader.read_int(1)
    return ExtType(code, reader.read_bytes(fmt.payload))


def _enter_container(depth: int, config: CodecConfig, offset: int) -> None:
    if depth >= config.max_depth:
        logger.debug("Refusing to decode past max_depth=%d", config.max_depth)
        raise DecodeError(f"Nesting exceeds max_depth={config.max_depth} at offset {offset}")
