#!/usr/bin/env python3
"""Basic usage example for mpwire.

This example demonstrates:
1. Encoding a nested value to compact binary format
2. Inspecting the headers the encoder chose
3. Decoding back, including the unread remainder
4. Handling values outside the supported data model
"""

from __future__ import annotations

from mpwire import EncodeError, ExtType, Map, decode, describe_header, encode, encoded_size


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("mpwire Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Encoding a status record...")
    record = Map(
        [
            ("vehicle", 42),
            ("depth_cm", 2500),
            ("offset", -7),
            ("name", "glider-3"),
            ("tags", ["survey", "night"]),
            ("stamp", ExtType(-1, (1_700_000_000).to_bytes(4, "big"))),
        ]
    )
    data = encode(record)
    print(f"   Encoded size: {len(data)} bytes (predicted {encoded_size(record)})")
    print(f"   Hex: {data.hex(' ')}")
    print()

    print("2. Header choices for individual values...")
    for value in (42, 2500, -7, -300, "glider-3", b"\x00" * 300):
        encoded = encode(value)
        print(f"   {value!r:>12.12} -> {describe_header(encoded[0]):<20} {len(encoded)} bytes")
    print()

    print("3. Decoding a stream of two values...")
    stream = data + encode([True, None])
    first, rest = decode(stream)
    second, rest = decode(rest)
    print(f"   First:  {first!r}")
    print(f"   Second: {second!r}")
    print(f"   Remaining: {rest!r}")
    print()

    print("4. Values outside the data model...")
    for bad in (3.14, Map([(i, i) for i in range(15)])):
        try:
            encode(bad)
        except EncodeError as e:
            print(f"   EncodeError: {e}")


if __name__ == "__main__":
    main()
