"""Buffer inspection CLI commands."""

from __future__ import annotations

import json
import logging

from ..codec import decode, encode
from ..models import Map
from ..utils.sizing import describe_header

logger = logging.getLogger(__name__)


def dump_values(data: bytes, describe: bool = False) -> int:
    """Decode and print every value in a buffer of concatenated values.

    Args:
        data: Buffer holding complete encoded values
        describe: If True, also print the leading format and byte span of each value

    Returns:
        Number of values printed

    Raises:
        DecodeError: If a value is malformed or truncated
    """
    count = 0
    offset = 0
    rest = data
    while rest:
        value, tail = decode(rest)
        consumed = len(rest) - len(tail)
        if describe:
            print(
                f"[{count}] @{offset} {describe_header(rest[0])}, {consumed} bytes: {value!r}"
            )
        else:
            print(repr(value))
        logger.debug("Decoded value %d (%d bytes) at offset %d", count, consumed, offset)
        count += 1
        offset += consumed
        rest = tail

    if count == 0:
        print("No values found (empty input)")
    return count


def encode_json(document: str) -> str:
    """Encode a JSON document and return the bytes as spaced hex.

    JSON objects become maps with their keys in document order.

    Raises:
        ValueError: If the document is not valid JSON
        EncodeError: If the document holds values outside the data model (floats)
    """
    value = json.loads(document, object_pairs_hook=Map)
    return encode(value).hex(" ")


def parse_hex(text: str) -> bytes:
    """Parse a hex string, ignoring whitespace, colons and an optional 0x prefix."""
    cleaned = "".join(text.split()).replace(":", "")
    if cleaned.lower().startswith("0x"):
        cleaned = cleaned[2:]
    return bytes.fromhex(cleaned)
