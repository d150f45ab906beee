"""Byte-level packing and unpacking utilities.

This module provides the low-level buffer primitives used by the codec.
All multi-byte integers are big-endian.
"""

from __future__ import annotations


class ByteWriter:
    """Accumulates encoded bytes.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write_uint(0xCD, 1)
        >>> writer.write_uint(300, 2)
        >>> writer.to_bytes()
        b'\\xcd\\x01,'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def write_uint(self, value: int, num_bytes: int) -> None:
        """Write an unsigned integer using the specified number of bytes.

        Args:
            value: Unsigned integer value to write (must be >= 0)
            num_bytes: Field width in bytes (1-8)

        Raises:
            ValueError: If value is negative or doesn't fit in num_bytes
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        if num_bytes < 1 or num_bytes > 8:
            raise ValueError(f"num_bytes must be 1-8, got {num_bytes}")

        max_value = (1 << (num_bytes * 8)) - 1
        if value > max_value:
            raise ValueError(
                f"Value {value} requires more than {num_bytes} bytes (max: {max_value})"
            )

        for shift in range((num_bytes - 1) * 8, -1, -8):
            self._buffer.append((value >> shift) & 0xFF)

    def write_int(self, value: int, num_bytes: int) -> None:
        """Write a signed integer using two's complement encoding.

        Args:
            value: Signed integer value to write
            num_bytes: Field width in bytes (1-8)

        Raises:
            ValueError: If value doesn't fit in num_bytes using two's complement
        """
        if num_bytes < 1 or num_bytes > 8:
            raise ValueError(f"num_bytes must be 1-8, got {num_bytes}")

        bits = num_bytes * 8
        min_value = -(1 << (bits - 1))
        max_value = (1 << (bits - 1)) - 1

        if value < min_value or value > max_value:
            raise ValueError(
                f"Value {value} doesn't fit in {num_bytes} bytes (range: {min_value} to {max_value})"
            )

        if value < 0:
            unsigned_value = (1 << bits) + value
        else:
            unsigned_value = value

        self.write_uint(unsigned_value, num_bytes)

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._buffer.extend(data)

    def __len__(self) -> int:
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)


class ByteReader:
    """Reads values from a byte buffer with an advancing cursor.

    Example:
        >>> reader = ByteReader(b"\\xcd\\x01,")
        >>> reader.read_byte()
        205
        >>> reader.read_uint(2)
        300
    """

    def __init__(self, data: bytes) -> None:
        """Initialize a reader positioned at the start of data.

        Args:
            data: Byte buffer to read
        """
        self._data = bytes(data)
        self._position = 0

    def _take(self, num_bytes: int) -> bytes:
        end = self._position + num_bytes
        if end > len(self._data):
            raise IndexError(
                f"Not enough bytes at offset {self._position}: need {num_bytes}, "
                f"have {len(self._data) - self._position}"
            )
        chunk = self._data[self._position : end]
        self._position = end
        return chunk

    def read_byte(self) -> int:
        """Read a single unsigned byte.

        Raises:
            IndexError: If no more bytes are available
        """
        return self._take(1)[0]

    def read_uint(self, num_bytes: int) -> int:
        """Read a big-endian unsigned integer.

        Args:
            num_bytes: Number of bytes to read (1-8)

        Returns:
            Unsigned integer value

        Raises:
            ValueError: If num_bytes is out of range
            IndexError: If not enough bytes are available
        """
        if num_bytes < 1 or num_bytes > 8:
            raise ValueError(f"num_bytes must be 1-8, got {num_bytes}")

        value = 0
        for byte in self._take(num_bytes):
            value = (value << 8) | byte
        return value

    def read_int(self, num_bytes: int) -> int:
        """Read a big-endian two's complement signed integer.

        Args:
            num_bytes: Number of bytes to read (1-8)

        Returns:
            Signed integer value

        Raises:
            ValueError: If num_bytes is out of range
            IndexError: If not enough bytes are available
        """
        unsigned_value = self.read_uint(num_bytes)

        bits = num_bytes * 8
        if unsigned_value & (1 << (bits - 1)):
            return unsigned_value - (1 << bits)
        return unsigned_value

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read raw bytes.

        Raises:
            IndexError: If not enough bytes are available
        """
        return self._take(num_bytes)

    def bytes_remaining(self) -> int:
        return len(self._data) - self._position

    def remaining(self) -> bytes:
        """Return the unread tail without advancing."""
        return self._data[self._position :]

    def position(self) -> int:
        """Return the current read offset in bytes."""
        return self._position
