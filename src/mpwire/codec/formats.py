"""Wire format table.

Every header byte the codec understands is described exactly once here. The
encoder walks the per-kind tiers to pick the narrowest format that covers a
value, and the decoder looks the leading byte up in the same table, so the two
directions cannot drift apart.

Header layout (all multi-byte fields are big-endian):

    0x00-0x7f  positive fixint     0xc4-0xc6  bin 8/16/32
    0x80-0x8f  fixmap              0xcc-0xcf  uint 8/16/32/64
    0x90-0x9f  fixarray            0xd0-0xd3  int 8/16/32/64
    0xa0-0xbf  fixstr              0xd4-0xd8  fixext 1/2/4/8/16
    0xc0       nil                 0xd9-0xdb  str 8/16/32
    0xc2/0xc3  false/true          0xdc/0xdd  array 16/32
    0xe0-0xff  negative fixint
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class Kind(enum.Enum):
    """Value shape carried by a format."""

    NIL = "nil"
    BOOL = "bool"
    INT = "int"
    STR = "str"
    BIN = "bin"
    ARRAY = "array"
    MAP = "map"
    EXT = "ext"


@dataclass(frozen=True)
class Format:
    """A single wire format.

    Attributes:
        name: Conventional format name (e.g. "uint16", "fixstr")
        kind: Value shape the format carries
        header: First header byte of the format
        span: Number of consecutive header bytes the format owns. Formats with
            span > 1 carry their value or length inside the header byte.
        width: Size in bytes of the integer or length field after the header
        signed: Whether the integer field is two's complement
        payload: Fixed payload size for fixext formats
        bias: Value carried by the first header byte of a spanning format
        limit: Largest value the encoder places in a spanning format, when it
            is smaller than what the span can hold
    """

    name: str
    kind: Kind
    header: int
    span: int = 1
    width: int = 0
    signed: bool = False
    payload: int = 0
    bias: int = 0
    limit: Optional[int] = None

    @property
    def embeds_value(self) -> bool:
        """True if the value or length lives in the header byte itself."""
        return self.span > 1

    @property
    def last_header(self) -> int:
        return self.header + self.span - 1

    @property
    def header_length(self) -> int:
        """Bytes used before any string/binary/child payload."""
        return 1 + self.width + (1 if self.kind is Kind.EXT else 0)

    def bounds(self) -> tuple[int, int]:
        """Inclusive range of values (or lengths) this format encodes."""
        if self.embeds_value:
            high = self.bias + self.span - 1
            if self.limit is not None:
                high = min(high, self.limit)
            return self.bias, high

        bits = self.width * 8
        if self.signed:
            return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        return 0, (1 << bits) - 1

    def covers(self, value: int) -> bool:
        low, high = self.bounds()
        return low <= value <= high

    def embed(self, value: int) -> int:
        """Header byte carrying value, for spanning formats."""
        return self.header + value - self.bias

    def extract(self, header_byte: int) -> int:
        """Value carried by header_byte, for spanning formats."""
        return header_byte - self.header + self.bias


POSITIVE_FIXINT = Format("positive fixint", Kind.INT, 0x00, span=0x80)
FIXMAP = Format("fixmap", Kind.MAP, 0x80, span=16, limit=14)
FIXARRAY = Format("fixarray", Kind.ARRAY, 0x90, span=16, limit=14)
FIXSTR = Format("fixstr", Kind.STR, 0xA0, span=32)
NIL = Format("nil", Kind.NIL, 0xC0)
FALSE = Format("false", Kind.BOOL, 0xC2)
TRUE = Format("true", Kind.BOOL, 0xC3)
BIN8 = Format("bin8", Kind.BIN, 0xC4, width=1)
BIN16 = Format("bin16", Kind.BIN, 0xC5, width=2)
BIN32 = Format("bin32", Kind.BIN, 0xC6, width=4)
UINT8 = Format("uint8", Kind.INT, 0xCC, width=1)
UINT16 = Format("uint16", Kind.INT, 0xCD, width=2)
UINT32 = Format("uint32", Kind.INT, 0xCE, width=4)
UINT64 = Format("uint64", Kind.INT, 0xCF, width=8)
INT8 = Format("int8", Kind.INT, 0xD0, width=1, signed=True)
INT16 = Format("int16", Kind.INT, 0xD1, width=2, signed=True)
INT32 = Format("int32", Kind.INT, 0xD2, width=4, signed=True)
INT64 = Format("int64", Kind.INT, 0xD3, width=8, signed=True)
FIXEXT1 = Format("fixext1", Kind.EXT, 0xD4, payload=1)
FIXEXT2 = Format("fixext2", Kind.EXT, 0xD5, payload=2)
FIXEXT4 = Format("fixext4", Kind.EXT, 0xD6, payload=4)
FIXEXT8 = Format("fixext8", Kind.EXT, 0xD7, payload=8)
FIXEXT16 = Format("fixext16", Kind.EXT, 0xD8, payload=16)
STR8 = Format("str8", Kind.STR, 0xD9, width=1)
STR16 = Format("str16", Kind.STR, 0xDA, width=2)
STR32 = Format("str32", Kind.STR, 0xDB, width=4)
ARRAY16 = Format("array16", Kind.ARRAY, 0xDC, width=2)
ARRAY32 = Format("array32", Kind.ARRAY, 0xDD, width=4)
# 0xe0 | (32 + n) for -32 <= n < 0
NEGATIVE_FIXINT = Format("negative fixint", Kind.INT, 0xE0, span=32, bias=-32)

FORMATS: tuple[Format, ...] = (
    POSITIVE_FIXINT,
    FIXMAP,
    FIXARRAY,
    FIXSTR,
    NIL,
    FALSE,
    TRUE,
    BIN8,
    BIN16,
    BIN32,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    INT8,
    INT16,
    INT32,
    INT64,
    FIXEXT1,
    FIXEXT2,
    FIXEXT4,
    FIXEXT8,
    FIXEXT16,
    STR8,
    STR16,
    STR32,
    ARRAY16,
    ARRAY32,
    NEGATIVE_FIXINT,
)

# Encoder tiers, narrowest first
UNSIGNED_INT_TIERS: tuple[Format, ...] = (POSITIVE_FIXINT, UINT8, UINT16, UINT32, UINT64)
SIGNED_INT_TIERS: tuple[Format, ...] = (NEGATIVE_FIXINT, INT8, INT16, INT32, INT64)
STR_TIERS: tuple[Format, ...] = (FIXSTR, STR8, STR16, STR32)
BIN_TIERS: tuple[Format, ...] = (BIN8, BIN16, BIN32)
ARRAY_TIERS: tuple[Format, ...] = (FIXARRAY, ARRAY16, ARRAY32)
MAP_TIERS: tuple[Format, ...] = (FIXMAP,)
EXT_TIERS: tuple[Format, ...] = (FIXEXT1, FIXEXT2, FIXEXT4, FIXEXT8, FIXEXT16)

# Valid MessagePack headers this codec deliberately does not handle
UNSUPPORTED: dict[int, str] = {
    0xC7: "ext8",
    0xC8: "ext16",
    0xC9: "ext32",
    0xCA: "float32",
    0xCB: "float64",
    0xDE: "map16",
    0xDF: "map32",
}


def _build_lookup() -> tuple[Optional[Format], ...]:
    table: list[Optional[Format]] = [None] * 256
    for fmt in FORMATS:
        for byte in range(fmt.header, fmt.last_header + 1):
            if table[byte] is not None:
                raise RuntimeError(f"header 0x{byte:02x} claimed by {table[byte]} and {fmt}")
            table[byte] = fmt
    return tuple(table)


_LOOKUP = _build_lookup()


def lookup(header_byte: int) -> Optional[Format]:
    """Return the format owning header_byte, or None if it is not handled."""
    return _LOOKUP[header_byte]


def select(tiers: tuple[Format, ...], value: int) -> Optional[Format]:
    """Return the first (narrowest) format in tiers that covers value."""
    for fmt in tiers:
        if fmt.covers(value):
            return fmt
    return None


def describe(header_byte: int) -> str:
    """Human-readable name for a leading byte.

    Spanning formats include the value carried in the header, e.g.
    ``fixarray(3)`` or ``negative fixint(-1)``.
    """
    if not 0 <= header_byte <= 0xFF:
        raise ValueError(f"header byte must be 0-255, got {header_byte}")

    fmt = lookup(header_byte)
    if fmt is None:
        name = UNSUPPORTED.get(header_byte)
        if name is not None:
            return f"{name} (unsupported)"
        return "never used"

    if fmt.embeds_value:
        return f"{fmt.name}({fmt.extract(header_byte)})"
    return fmt.name
