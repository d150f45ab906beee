"""Unit tests for encoding/decoding."""

from __future__ import annotations

import pytest

from mpwire import (
    CodecConfig,
    DecodeError,
    EncodeError,
    ExtType,
    Map,
    MpwireError,
    decode,
    encode,
)


class TestIntegers:
    """Test integer encoding."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, b"\x00"),
            (127, b"\x7f"),
            (128, b"\xcc\x80"),
            (255, b"\xcc\xff"),
            (256, b"\xcd\x01\x00"),
            (65535, b"\xcd\xff\xff"),
            (65536, b"\xce\x00\x01\x00\x00"),
            (2**32 - 1, b"\xce\xff\xff\xff\xff"),
            (2**32, b"\xcf\x00\x00\x00\x01\x00\x00\x00\x00"),
            (2**64 - 1, b"\xcf" + b"\xff" * 8),
        ],
    )
    def test_unsigned_tiers(self, value: int, expected: bytes) -> None:
        """Test narrowest unsigned header selection."""
        assert encode(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            (-1, b"\xff"),
            (-32, b"\xe0"),
            (-33, b"\xd0\xdf"),
            (-128, b"\xd0\x80"),
            (-129, b"\xd1\xff\x7f"),
            (-32768, b"\xd1\x80\x00"),
            (-32769, b"\xd2\xff\xff\x7f\xff"),
            (-(2**31), b"\xd2\x80\x00\x00\x00"),
            (-(2**31) - 1, b"\xd3\xff\xff\xff\xff\x7f\xff\xff\xff"),
            (-(2**63), b"\xd3\x80" + b"\x00" * 7),
        ],
    )
    def test_signed_tiers(self, value: int, expected: bytes) -> None:
        """Test two's complement boundaries."""
        assert encode(value) == expected

    def test_out_of_range(self) -> None:
        """Test integers outside uint64/int64."""
        with pytest.raises(EncodeError, match="range"):
            encode(2**64)

        with pytest.raises(EncodeError, match="range"):
            encode(-(2**63) - 1)

    def test_decode_wide_forms(self) -> None:
        """Test that wider-than-needed encodings still decode."""
        assert decode(b"\xce\x00\x00\x00\x05") == (5, b"")
        assert decode(b"\xcd\x00\x00") == (0, b"")
        assert decode(b"\xd3" + b"\xff" * 8) == (-1, b"")
        # Positive values in signed headers
        assert decode(b"\xd0\x05") == (5, b"")
        assert decode(b"\xd1\x7f\xff") == (32767, b"")

    def test_decode_full_unsigned_range(self) -> None:
        """Test top-bit-set values in unsigned headers stay positive."""
        assert decode(b"\xcc\xff") == (255, b"")
        assert decode(b"\xcf" + b"\xff" * 8) == (2**64 - 1, b"")


class TestStrings:
    """Test string encoding."""

    @pytest.mark.parametrize(
        "length,header",
        [
            (0, b"\xa0"),
            (31, b"\xbf"),
            (32, b"\xd9\x20"),
            (255, b"\xd9\xff"),
            (256, b"\xda\x01\x00"),
            (65535, b"\xda\xff\xff"),
            (65536, b"\xdb\x00\x01\x00\x00"),
        ],
    )
    def test_boundary_tiers(self, length: int, header: bytes) -> None:
        """Test header selection and round-trip at each tier boundary."""
        text = "x" * length
        data = encode(text)

        assert data.startswith(header)
        assert len(data) == len(header) + length
        assert decode(data) == (text, b"")

    def test_length_in_utf8_bytes(self) -> None:
        """Test that length counts encoded bytes, not code points."""
        text = "é" * 16  # 16 code points, 32 bytes
        data = encode(text)

        assert data[:2] == b"\xd9\x20"
        assert decode(data) == (text, b"")

    def test_decode_explicit_length_for_short_string(self) -> None:
        """Test str8 holding a string that would fit fixstr."""
        assert decode(b"\xd9\x02hi") == ("hi", b"")

    def test_invalid_utf8(self) -> None:
        """Test invalid UTF-8 payload."""
        with pytest.raises(DecodeError, match="UTF-8"):
            decode(b"\xa2\xff\xfe")

    def test_unencodable_string(self) -> None:
        """Test lone surrogates."""
        with pytest.raises(EncodeError, match="UTF-8"):
            encode("\ud800")


class TestBinary:
    """Test binary encoding."""

    @pytest.mark.parametrize(
        "length,header",
        [
            (0, b"\xc4\x00"),
            (255, b"\xc4\xff"),
            (256, b"\xc5\x01\x00"),
            (65535, b"\xc5\xff\xff"),
            (65536, b"\xc6\x00\x01\x00\x00"),
        ],
    )
    def test_tiers(self, length: int, header: bytes) -> None:
        """Test that binaries never use an inline form."""
        blob = b"\x00" * length
        data = encode(blob)

        assert data.startswith(header)
        assert decode(data) == (blob, b"")

    def test_buffer_types(self) -> None:
        """Test bytearray and memoryview inputs."""
        assert encode(bytearray(b"ab")) == b"\xc4\x02ab"
        assert encode(memoryview(b"ab")) == b"\xc4\x02ab"

    def test_decoded_type(self) -> None:
        """Test that binaries decode to bytes, strings to str."""
        assert isinstance(decode(b"\xc4\x01a")[0], bytes)
        assert isinstance(decode(b"\xa1a")[0], str)


class TestScalars:
    """Test nil and booleans."""

    def test_nil_and_bool(self) -> None:
        """Test fixed single-byte values."""
        assert encode(None) == b"\xc0"
        assert encode(False) == b"\xc2"
        assert encode(True) == b"\xc3"
        assert decode(b"\xc0") == (None, b"")
        assert decode(b"\xc2") == (False, b"")
        assert decode(b"\xc3") == (True, b"")

    def test_bool_is_not_int(self) -> None:
        """Test that bools never take the integer path."""
        value, _ = decode(encode(True))
        assert value is True
        assert encode(1) == b"\x01"


class TestArrays:
    """Test array encoding."""

    def test_fixarray(self) -> None:
        """Test small arrays."""
        assert encode([]) == b"\x90"
        assert encode([1, 2, 3]) == b"\x93\x01\x02\x03"
        assert encode((1, 2)) == b"\x92\x01\x02"

    def test_fourteen_is_last_fix_length(self) -> None:
        """Test the fixarray/array16 boundary."""
        assert encode([0] * 14)[0] == 0x9E
        assert encode([0] * 15)[:3] == b"\xdc\x00\x0f"

    def test_array32(self) -> None:
        """Test array32 header."""
        data = encode([None] * 65536)
        assert data[:5] == b"\xdd\x00\x01\x00\x00"
        assert decode(data) == ([None] * 65536, b"")

    def test_decode_fixarray_fifteen(self) -> None:
        """Test that the full fixarray nibble is accepted on decode."""
        data = b"\x9f" + b"\x01" * 15
        assert decode(data) == ([1] * 15, b"")

    def test_decode_array16(self) -> None:
        """Test array16 holding a short array."""
        assert decode(b"\xdc\x00\x02\xc3\xc2") == ([True, False], b"")


class TestMaps:
    """Test map encoding."""

    def test_fixmap(self) -> None:
        """Test small maps preserve order."""
        data = encode(Map([("b", 1), ("a", 2)]))
        assert data == b"\x82\xa1b\x01\xa1a\x02"
        assert decode(data) == (Map([("b", 1), ("a", 2)]), b"")

    def test_dict_input(self) -> None:
        """Test dicts are encoded in insertion order."""
        assert encode({"k": None}) == b"\x81\xa1k\xc0"

    def test_duplicate_and_unhashable_keys(self) -> None:
        """Test that every pair is retained."""
        value = Map([([1], "list"), ("a", 1), ("a", 2), (Map([(1, 2)]), None)])
        decoded, rest = decode(encode(value))

        assert rest == b""
        assert decoded == value
        assert len(decoded) == 4

    def test_fifteen_entries_rejected(self) -> None:
        """Test the unsupported map16 boundary."""
        encode(Map([(i, i) for i in range(14)]))

        with pytest.raises(EncodeError, match="15 entries"):
            encode(Map([(i, i) for i in range(15)]))

        with pytest.raises(EncodeError, match="not supported"):
            encode({i: i for i in range(15)})

    def test_decode_fixmap_fifteen(self) -> None:
        """Test the full fixmap nibble on decode."""
        data = b"\x8f" + b"\x01\x02" * 15
        decoded, _ = decode(data)
        assert len(decoded) == 15

    def test_map16_rejected(self) -> None:
        """Test map16/map32 headers."""
        with pytest.raises(DecodeError, match="map16"):
            decode(b"\xde\x00\x00")

        with pytest.raises(DecodeError, match="map32"):
            decode(b"\xdf\x00\x00\x00\x00")

    def test_accept_dict_disabled(self) -> None:
        """Test config forbidding plain dicts."""
        config = CodecConfig(accept_dict=False)

        with pytest.raises(EncodeError, match="dict"):
            encode({"a": 1}, config=config)

        assert encode(Map([("a", 1)]), config=config) == b"\x81\xa1a\x01"

    def test_strict_map_keys(self) -> None:
        """Test config restricting key types."""
        config = CodecConfig(strict_map_keys=True)

        assert encode(Map([("a", 1), (2, 3), (b"k", 4)]), config=config)

        with pytest.raises(EncodeError, match="strict_map_keys"):
            encode(Map([([1], 1)]), config=config)

        with pytest.raises(EncodeError, match="strict_map_keys"):
            encode(Map([(True, 1)]), config=config)


class TestExtensions:
    """Test extension encoding."""

    @pytest.mark.parametrize(
        "size,header", [(1, 0xD4), (2, 0xD5), (4, 0xD6), (8, 0xD7), (16, 0xD8)]
    )
    def test_fixext(self, size: int, header: int) -> None:
        """Test each fixed payload size."""
        ext = ExtType(-3, bytes(range(size)))
        data = encode(ext)

        assert data[0] == header
        assert data[1] == 0xFD  # -3 as a signed byte
        assert data[2:] == bytes(range(size))
        assert decode(data) == (ext, b"")

    def test_variable_ext_rejected(self) -> None:
        """Test ext8/16/32 headers."""
        with pytest.raises(DecodeError, match="ext8"):
            decode(b"\xc7\x03\x01abc")

        with pytest.raises(DecodeError, match="ext16"):
            decode(b"\xc8\x00\x01\x01a")


class TestNesting:
    """Test nested containers."""

    def test_depth_three(self) -> None:
        """Test an array containing a map containing an array."""
        value = [1, Map([("inner", [True, None, "x"])]), b"\x00"]
        data = encode(value)

        assert data == b"\x93\x01\x81\xa5inner\x93\xc3\xc0\xa1x\xc4\x01\x00"
        assert decode(data) == (value, b"")

    def test_max_depth_encode(self) -> None:
        """Test nesting limit on encode."""
        config = CodecConfig(max_depth=2)

        encode([[1]], config=config)
        with pytest.raises(EncodeError, match="max_depth"):
            encode([[[1]]], config=config)

    def test_max_depth_decode(self) -> None:
        """Test nesting limit on decode."""
        config = CodecConfig(max_depth=2)

        assert decode(b"\x91\x91\x01", config=config) == ([[1]], b"")
        with pytest.raises(DecodeError, match="max_depth"):
            decode(b"\x91\x91\x91\x01", config=config)

    def test_self_reference(self) -> None:
        """Test that cyclic containers fail cleanly."""
        cyclic: list = []
        cyclic.append(cyclic)

        with pytest.raises(EncodeError, match="max_depth"):
            encode(cyclic)

    def test_deep_hostile_input(self) -> None:
        """Test deeply nested input is refused before exhausting the stack."""
        data = b"\x91" * 100_000 + b"\xc0"

        with pytest.raises(DecodeError, match="max_depth"):
            decode(data)


class TestEncodeErrors:
    """Test encoding error handling."""

    def test_float_rejected(self) -> None:
        """Test floating point values."""
        with pytest.raises(EncodeError, match="Floating point"):
            encode(1.5)

        with pytest.raises(EncodeError, match="Floating point"):
            encode([1, 2.0])

    def test_unsupported_type(self) -> None:
        """Test arbitrary objects."""
        with pytest.raises(EncodeError, match="Unsupported type set"):
            encode({1, 2})

        with pytest.raises(EncodeError, match="Unsupported type object"):
            encode(object())


class TestDecodeErrors:
    """Test decoding error handling."""

    def test_empty_input(self) -> None:
        """Test empty buffer."""
        with pytest.raises(DecodeError, match="[Tt]runcated"):
            decode(b"")

    @pytest.mark.parametrize(
        "data",
        [
            b"\xcd\x01",
            b"\xd3\x00\x00\x00",
            b"\xa3ab",
            b"\xd9\x05abc",
            b"\xc4\x02a",
            b"\xc6\x00\x00",
            b"\x92\x01",
            b"\x81\xa1a",
            b"\xd6\x01\x00\x00",
        ],
    )
    def test_truncated_data(self, data: bytes) -> None:
        """Test declared lengths longer than the input."""
        with pytest.raises(DecodeError, match="[Tt]runcated"):
            decode(data)

    def test_unused_header(self) -> None:
        """Test the never-used 0xc1 byte."""
        with pytest.raises(DecodeError, match="Invalid header byte 0xc1"):
            decode(b"\xc1")

    def test_float_header(self) -> None:
        """Test float headers are reported as unsupported."""
        with pytest.raises(DecodeError, match="float64"):
            decode(b"\xcb" + b"\x00" * 8)

    def test_nested_error_offset(self) -> None:
        """Test that errors inside containers report the inner offset."""
        with pytest.raises(DecodeError, match="offset 2"):
            decode(b"\x92\x01\xc1")

    def test_non_bytes_input(self) -> None:
        """Test non-buffer input."""
        with pytest.raises(DecodeError, match="bytes-like"):
            decode("\x01")  # type: ignore[arg-type]


class TestInterpreterStackLimit:
    """Test nesting beyond the interpreter stack with a permissive max_depth."""

    @staticmethod
    def _nested_list(levels: int) -> list:
        value: list = []
        for _ in range(levels):
            value = [value]
        return value

    def test_decode_raises_decode_error(self) -> None:
        """Test a RecursionError surfaces as DecodeError."""
        config = CodecConfig(max_depth=100_000)
        data = b"\x91" * 5000 + b"\xc0"

        with pytest.raises(DecodeError, match="interpreter stack") as exc_info:
            decode(data, config=config)

        assert isinstance(exc_info.value.__cause__, RecursionError)

    def test_encode_raises_encode_error(self) -> None:
        """Test a RecursionError surfaces as EncodeError."""
        config = CodecConfig(max_depth=100_000)

        with pytest.raises(EncodeError, match="interpreter stack"):
            encode(self._nested_list(5000), config=config)

    def test_codec_still_usable_afterwards(self) -> None:
        """Test the stack unwinds cleanly after the failure."""
        config = CodecConfig(max_depth=100_000)

        with pytest.raises(MpwireError):
            decode(b"\x91" * 5000 + b"\xc0", config=config)

        assert decode(b"\x91\x91\xc0", config=config) == ([[None]], b"")
