"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from mpwire import ExtType, Map


@pytest.fixture
def sample_document() -> list:
    """Nested value exercising every supported kind."""
    return [
        None,
        True,
        -1,
        2**40,
        "Hello, wire!",
        b"\x00\x01\x02",
        Map([("id", 7), ("tags", ["a", "b"]), ([1, 2], Map())]),
        ExtType(-1, b"\x00" * 8),
    ]


@pytest.fixture
def sample_payload() -> bytes:
    """Sample encoded stream of three concatenated values."""
    return b"\x01\xa2hi\x92\xc3\xc2"
